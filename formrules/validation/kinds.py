"""Validation Error Kinds

A closed taxonomy of validation failures. Every kind is an immutable record
carrying the structured data a reporting layer needs (expected/got pairs,
bounds, allowed sets) plus a stable wire tag.

Wire Format:
    "required_error"                       bare tag, no payload
    ["min_len_error", [3, 2]]              [tag, payload]
    ["validate_error", ["Must be even"]]   custom message

Only ``RequiredError`` and ``UniqueError`` serialize to a bare tag.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, ClassVar


def render(value: Any) -> str:
    """Compact JSON text for a document value."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


@dataclass(frozen=True, slots=True)
class ErrorKind:
    """Base for all validation failure kinds."""
    tag: ClassVar[str] = "validate_error"

    def payload(self) -> list[Any] | None:
        """Kind-specific payload, or None for bare-tag kinds."""
        return None

    def to_wire(self) -> str | list[Any]:
        if (payload := self.payload()) is None: return self.tag
        return [self.tag, payload]

    def __str__(self) -> str:
        payload = self.payload()
        return self.tag if payload is None else f"{self.tag}: {payload}"


@dataclass(frozen=True, slots=True)
class RequiredError(ErrorKind):
    tag: ClassVar[str] = "required_error"


@dataclass(frozen=True, slots=True)
class TypeMismatchError(ErrorKind):
    tag: ClassVar[str] = "type_error"
    expected: str
    got: str

    def payload(self) -> list[Any]: return [self.expected, self.got]


@dataclass(frozen=True, slots=True)
class LengthError(ErrorKind):
    tag: ClassVar[str] = "len_error"
    expected: int
    got: int

    def payload(self) -> list[Any]: return [self.expected, self.got]


@dataclass(frozen=True, slots=True)
class MinLengthError(ErrorKind):
    tag: ClassVar[str] = "min_len_error"
    expected: int
    got: int

    def payload(self) -> list[Any]: return [self.expected, self.got]


@dataclass(frozen=True, slots=True)
class MaxLengthError(ErrorKind):
    tag: ClassVar[str] = "max_len_error"
    expected: int
    got: int

    def payload(self) -> list[Any]: return [self.expected, self.got]


@dataclass(frozen=True, slots=True)
class NotEqualError(ErrorKind):
    tag: ClassVar[str] = "eq_error"
    expected: str
    got: str

    def payload(self) -> list[Any]: return [self.expected, self.got]


@dataclass(frozen=True, slots=True)
class MinValueError(ErrorKind):
    tag: ClassVar[str] = "min_error"
    expected: float
    got: float

    def payload(self) -> list[Any]: return [self.expected, self.got]


@dataclass(frozen=True, slots=True)
class MaxValueError(ErrorKind):
    tag: ClassVar[str] = "max_error"
    expected: float
    got: float

    def payload(self) -> list[Any]: return [self.expected, self.got]


@dataclass(frozen=True, slots=True)
class _RawValueError(ErrorKind):
    """Kinds whose payload is the single offending raw value."""
    raw: str

    def payload(self) -> list[Any]: return [self.raw]


@dataclass(frozen=True, slots=True)
class NumericError(_RawValueError):
    tag: ClassVar[str] = "numeric_error"


@dataclass(frozen=True, slots=True)
class AcceptedError(_RawValueError):
    tag: ClassVar[str] = "accepted_error"


@dataclass(frozen=True, slots=True)
class EmailError(_RawValueError):
    tag: ClassVar[str] = "email_error"


@dataclass(frozen=True, slots=True)
class EmailDomainError(ErrorKind):
    tag: ClassVar[str] = "email_domain_name_error"
    domain: str

    def payload(self) -> list[Any]: return [self.domain]


@dataclass(frozen=True, slots=True)
class InError(ErrorKind):
    tag: ClassVar[str] = "in_error"
    values: tuple[Any, ...]

    def payload(self) -> list[Any]: return [list(self.values)]


@dataclass(frozen=True, slots=True)
class NotInError(ErrorKind):
    tag: ClassVar[str] = "not_in_error"
    values: tuple[Any, ...]

    def payload(self) -> list[Any]: return [list(self.values)]


@dataclass(frozen=True, slots=True)
class RegexError(ErrorKind):
    tag: ClassVar[str] = "regex_error"
    message: str

    def payload(self) -> list[Any]: return [self.message]


@dataclass(frozen=True, slots=True)
class UrlError(_RawValueError):
    tag: ClassVar[str] = "url_error"


@dataclass(frozen=True, slots=True)
class IpError(_RawValueError):
    tag: ClassVar[str] = "ip_error"


@dataclass(frozen=True, slots=True)
class ExtensionError(ErrorKind):
    tag: ClassVar[str] = "extension_error"
    allowed: tuple[str, ...]

    def payload(self) -> list[Any]: return [list(self.allowed)]


@dataclass(frozen=True, slots=True)
class UniqueError(ErrorKind):
    tag: ClassVar[str] = "unique_error"


@dataclass(frozen=True, slots=True)
class FileSizeError(ErrorKind):
    tag: ClassVar[str] = "file_size_error"
    min: int
    max: int

    def payload(self) -> list[Any]: return [self.min, self.max]


@dataclass(frozen=True, slots=True)
class CustomError(ErrorKind):
    """Escape hatch for user-defined checks."""
    tag: ClassVar[str] = "validate_error"
    message: str

    def payload(self) -> list[Any]: return [self.message]


@dataclass(frozen=True, slots=True)
class AsyncRequiredError(CustomError):
    """An async-only validator was run through the synchronous path."""
    message: str = "Async validation required"


ErrorMap = dict[str, list[ErrorKind]]


def errors_to_wire(errors: ErrorMap) -> dict[str, list[str | list[Any]]]:
    """Serialize a field → kinds mapping to its wire shape."""
    return {field: [kind.to_wire() for kind in kinds] for field, kinds in errors.items()}
