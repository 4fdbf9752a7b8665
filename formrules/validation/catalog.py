"""Built-in Validator Catalog

Frozen dataclass validators for the common checks. Every validator except
``Required`` treats ``None`` as valid: presence and well-formedness are
separate concerns, composed by chaining ``Required()`` in a ``Rules``.

Type checks:      Required, IsString, IsInteger, IsFloat, IsBoolean, IsArray, IsObject
Size checks:      Length, MinLength, MaxLength, FileSize
Value checks:     Equal, MinValue, MaxValue, Numeric, Accepted, OneOf, NoneOf
Format checks:    EmailValidator, RegexPattern, URLValidator, IPAddressValidator, Extensions
"""
from __future__ import annotations

import re
from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable

from .base import VALID, Outcome, Validator, contains_value, invalid, is_integer, is_number
from .kinds import (
    AcceptedError,
    EmailDomainError,
    EmailError,
    ExtensionError,
    FileSizeError,
    InError,
    IpError,
    LengthError,
    MaxLengthError,
    MaxValueError,
    MinLengthError,
    MinValueError,
    NotEqualError,
    NotInError,
    NumericError,
    RegexError,
    RequiredError,
    TypeMismatchError,
    UrlError,
    render,
)

SIZED_TYPES = "string, array, or object"

_URL_PATTERN = re.compile(
    r"""(?i)\b(?:https?://|www\d{0,3}[.]|[a-z0-9.\-]+[.][a-z]{2,4}/)"""
    r"""[^\s()<>]+[^\s`!()\[\]{};:'".,<>?«»“”‘’]"""
)
_IPV4_PATTERN = re.compile(r"(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})", re.ASCII)
_ACCEPTED_TERMS = frozenset({"yes", "on", "1", "true"})


def _type_mismatch(expected: str, value: Any) -> Outcome:
    return invalid(TypeMismatchError(expected=expected, got=render(value)))


def _size_of(value: Any) -> int | None:
    if isinstance(value, (str, list, dict)):
        return len(value)
    return None


# ============================================================================
# Type Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class Required(Validator):
    """Value must not be null."""

    def validate(self, value: Any) -> Outcome:
        return invalid(RequiredError()) if value is None else VALID


@dataclass(frozen=True, slots=True)
class _TypeCheck(Validator):
    expected = ""

    @abstractmethod
    def accepts(self, value: Any) -> bool: ...

    def validate(self, value: Any) -> Outcome:
        if value is None or self.accepts(value): return VALID
        return _type_mismatch(self.expected, value)


@dataclass(frozen=True, slots=True)
class IsString(_TypeCheck):
    expected = "string"

    def accepts(self, value: Any) -> bool: return isinstance(value, str)


@dataclass(frozen=True, slots=True)
class IsInteger(_TypeCheck):
    expected = "int"

    def accepts(self, value: Any) -> bool: return is_integer(value)


@dataclass(frozen=True, slots=True)
class IsFloat(_TypeCheck):
    expected = "float"

    def accepts(self, value: Any) -> bool: return isinstance(value, float)


@dataclass(frozen=True, slots=True)
class IsBoolean(_TypeCheck):
    expected = "bool"

    def accepts(self, value: Any) -> bool: return isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class IsArray(_TypeCheck):
    expected = "array"

    def accepts(self, value: Any) -> bool: return isinstance(value, list)


@dataclass(frozen=True, slots=True)
class IsObject(_TypeCheck):
    expected = "object"

    def accepts(self, value: Any) -> bool: return isinstance(value, dict)


# ============================================================================
# Size Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class Length(Validator):
    """Exact length for strings (characters), arrays and objects."""
    length: int

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if (size := _size_of(value)) is None: return _type_mismatch(SIZED_TYPES, value)
        if size == self.length: return VALID
        return invalid(LengthError(expected=self.length, got=size))


@dataclass(frozen=True, slots=True)
class MinLength(Validator):
    min: int

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if (size := _size_of(value)) is None: return _type_mismatch(SIZED_TYPES, value)
        if size >= self.min: return VALID
        return invalid(MinLengthError(expected=self.min, got=size))


@dataclass(frozen=True, slots=True)
class MaxLength(Validator):
    max: int

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if (size := _size_of(value)) is None: return _type_mismatch(SIZED_TYPES, value)
        if size <= self.max: return VALID
        return invalid(MaxLengthError(expected=self.max, got=size))


@dataclass(frozen=True, slots=True)
class FileSize(Validator):
    """Byte count within [min_bytes, max_bytes].

    Accepts either a bare integer or upload metadata carrying an integer ``size``.
    """
    min_bytes: int
    max_bytes: int

    def __post_init__(self):
        if self.min_bytes < 0 or self.max_bytes < self.min_bytes:
            raise ValueError(f"Invalid file size bounds: [{self.min_bytes}, {self.max_bytes}]")

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        size = value.get("size") if isinstance(value, dict) else value
        if not is_integer(size):
            return _type_mismatch("int or object with int size", value)
        if self.min_bytes <= size <= self.max_bytes: return VALID
        return invalid(FileSizeError(min=self.min_bytes, max=self.max_bytes))


# ============================================================================
# Value Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class Equal(Validator):
    """Exact match; 1, 1.0 and true are all different values."""
    expected: Any

    def validate(self, value: Any) -> Outcome:
        if value is None or contains_value((self.expected,), value): return VALID
        return invalid(NotEqualError(expected=render(self.expected), got=render(value)))


@dataclass(frozen=True, slots=True)
class MinValue(Validator):
    """Inclusive lower bound."""
    min: float

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if not is_number(value): return _type_mismatch("number", value)
        if value >= self.min: return VALID
        return invalid(MinValueError(expected=float(self.min), got=float(value)))


@dataclass(frozen=True, slots=True)
class MaxValue(Validator):
    """Inclusive upper bound."""
    max: float

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if not is_number(value): return _type_mismatch("number", value)
        if value <= self.max: return VALID
        return invalid(MaxValueError(expected=float(self.max), got=float(value)))


@dataclass(frozen=True, slots=True)
class Numeric(Validator):
    """String that parses as a floating point number."""

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if isinstance(value, str) and value.isascii() and value == value.strip() and "_" not in value:
            try:
                float(value)
                return VALID
            except ValueError:
                pass
        return invalid(NumericError(raw=render(value)))


@dataclass(frozen=True, slots=True)
class Accepted(Validator):
    """Common "accepted" terms: yes, on, 1, true."""

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if isinstance(value, str):
            term = value.lower()
        elif isinstance(value, bool):
            term = "true" if value else "false"
        elif is_number(value):
            term = str(value)
        else:
            return _type_mismatch("string, bool, or number", value)
        if term in _ACCEPTED_TERMS: return VALID
        return invalid(AcceptedError(raw=render(value)))


@dataclass(frozen=True, slots=True)
class OneOf(Validator):
    """Value must be in the allowed set."""
    values: tuple[Any, ...]

    def __init__(self, values: Iterable[Any]):
        object.__setattr__(self, "values", tuple(values))

    def validate(self, value: Any) -> Outcome:
        if value is None or contains_value(self.values, value): return VALID
        return invalid(InError(values=self.values))


@dataclass(frozen=True, slots=True)
class NoneOf(Validator):
    """Value must not be in the excluded set."""
    values: tuple[Any, ...]

    def __init__(self, values: Iterable[Any]):
        object.__setattr__(self, "values", tuple(values))

    def validate(self, value: Any) -> Outcome:
        if value is None or not contains_value(self.values, value): return VALID
        return invalid(NotInError(values=self.values))


# ============================================================================
# Format Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class EmailValidator(Validator):
    """local@domain.tld with an optional allow-list of domains."""
    allowed_domains: frozenset[str] | None = None

    def __init__(self, allowed_domains: Iterable[str] | None = None):
        object.__setattr__(self, "allowed_domains",
            frozenset(allowed_domains) if allowed_domains is not None else None)

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if not isinstance(value, str): return _type_mismatch("string", value)

        parts = value.split("@")
        if len(parts) != 2:
            return invalid(EmailError(raw=value))
        local, domain = parts
        labels = domain.split(".")
        if len(labels) < 2 or len(labels[1]) < 2:
            return invalid(EmailError(raw=value))
        if self.allowed_domains is not None and domain not in self.allowed_domains:
            return invalid(EmailDomainError(domain=domain))
        if len(local) < 3:
            return invalid(EmailError(raw=value))
        return VALID


@dataclass(frozen=True, slots=True)
class RegexPattern(Validator):
    """String must contain a match for the pattern.

    Raises re.error at construction for an invalid pattern.
    """
    pattern: re.Pattern
    message: str | None = None

    def __init__(self, pattern: str | re.Pattern, message: str | None = None):
        object.__setattr__(self, "pattern", re.compile(pattern))
        object.__setattr__(self, "message", message)

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if not isinstance(value, str): return _type_mismatch("string", value)
        if self.pattern.search(value): return VALID
        return invalid(RegexError(message=self.message if self.message is not None else value))


@dataclass(frozen=True, slots=True)
class URLValidator(Validator):
    """Web URL: scheme-qualified, www-prefixed, or host/path shaped."""

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if not isinstance(value, str): return _type_mismatch("string", value)
        if _URL_PATTERN.search(value): return VALID
        return invalid(UrlError(raw=value))


@dataclass(frozen=True, slots=True)
class IPAddressValidator(Validator):
    """Dotted-quad IPv4 address."""

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if not isinstance(value, str): return _type_mismatch("string", value)
        if (match := _IPV4_PATTERN.fullmatch(value)) and all(int(octet) <= 255 for octet in match.groups()):
            return VALID
        return invalid(IpError(raw=value))


@dataclass(frozen=True, slots=True)
class Extensions(Validator):
    """File name whose last dot-separated segment is an allowed extension."""
    allowed: frozenset[str]

    def __init__(self, allowed: Iterable[str]):
        object.__setattr__(self, "allowed", frozenset(allowed))

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        if not isinstance(value, str): return _type_mismatch("string", value)
        if value.rsplit(".", 1)[-1] in self.allowed: return VALID
        return invalid(ExtensionError(allowed=tuple(sorted(self.allowed))))
