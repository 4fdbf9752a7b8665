"""Declarative Document Validation

Validators are small immutable objects that check one value. ``Rules`` chains
them per field, with an optional default for null values, and
``FormValidator`` applies a set of chains to a document addressed by
dot-separated paths.

Key Features:
- Built-in catalog: type, size, value and format checks
- Rules chains with first-error short-circuit and null defaults
- Accumulate-all or break-on-first-error form validation
- Async validation with a pluggable uniqueness lookup service
- Stable wire format for error kinds
- FastAPI dependency and 422 handler

Usage:
    from formrules.validation import FormValidator, Rules, rules, Required, IsString, MinValue

    form = (
        FormValidator()
        .add("name", rules(Required(), IsString()))
        .add("age", Rules().add(MinValue(18)).default(21))
    )
    result = form.validate({"name": "Ada"})
    # Ok({"name": "Ada", "age": 21})
"""

# Validator capability
from .base import (
    Value,
    Outcome,
    ValidatorFn,
    VALID,
    invalid,
    Validator,
    CustomValidator,
    custom,
    as_validator,
    values_equal,
)

# Error kinds
from .kinds import (
    ErrorKind,
    ErrorMap,
    RequiredError,
    TypeMismatchError,
    LengthError,
    MinLengthError,
    MaxLengthError,
    NotEqualError,
    MinValueError,
    MaxValueError,
    NumericError,
    AcceptedError,
    EmailError,
    EmailDomainError,
    InError,
    NotInError,
    RegexError,
    UrlError,
    IpError,
    ExtensionError,
    UniqueError,
    FileSizeError,
    CustomError,
    AsyncRequiredError,
    errors_to_wire,
    render,
)

# Built-in validators
from .catalog import (
    Required,
    IsString,
    IsInteger,
    IsFloat,
    IsBoolean,
    IsArray,
    IsObject,
    Length,
    MinLength,
    MaxLength,
    FileSize,
    Equal,
    MinValue,
    MaxValue,
    Numeric,
    Accepted,
    OneOf,
    NoneOf,
    EmailValidator,
    RegexPattern,
    URLValidator,
    IPAddressValidator,
    Extensions,
)

# Composition
from .rules import Rules, rules
from .form import (
    FormValidator,
    FormResult,
    FieldBinding,
    PlainField,
    DefaultedField,
    resolve_path,
)

# Uniqueness
from .unique import LookupService, UniqueValidator, InMemoryLookupService

__all__ = [
    # Capability
    "Value",
    "Outcome",
    "ValidatorFn",
    "VALID",
    "invalid",
    "Validator",
    "CustomValidator",
    "custom",
    "as_validator",
    "values_equal",
    # Kinds
    "ErrorKind",
    "ErrorMap",
    "RequiredError",
    "TypeMismatchError",
    "LengthError",
    "MinLengthError",
    "MaxLengthError",
    "NotEqualError",
    "MinValueError",
    "MaxValueError",
    "NumericError",
    "AcceptedError",
    "EmailError",
    "EmailDomainError",
    "InError",
    "NotInError",
    "RegexError",
    "UrlError",
    "IpError",
    "ExtensionError",
    "UniqueError",
    "FileSizeError",
    "CustomError",
    "AsyncRequiredError",
    "errors_to_wire",
    "render",
    # Catalog
    "Required",
    "IsString",
    "IsInteger",
    "IsFloat",
    "IsBoolean",
    "IsArray",
    "IsObject",
    "Length",
    "MinLength",
    "MaxLength",
    "FileSize",
    "Equal",
    "MinValue",
    "MaxValue",
    "Numeric",
    "Accepted",
    "OneOf",
    "NoneOf",
    "EmailValidator",
    "RegexPattern",
    "URLValidator",
    "IPAddressValidator",
    "Extensions",
    # Composition
    "Rules",
    "rules",
    "FormValidator",
    "FormResult",
    "FieldBinding",
    "PlainField",
    "DefaultedField",
    "resolve_path",
    # Uniqueness
    "LookupService",
    "UniqueValidator",
    "InMemoryLookupService",
]
