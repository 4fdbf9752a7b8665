"""Form Validation

Validates a whole document against a set of field paths. Paths are plain keys
(``"name"``) or dot-separated descents into nested mappings
(``"address.city"``). A missing key anywhere along the path resolves to
``None`` so that ``Required`` decides whether absence is an error.

    form = (
        FormValidator()
        .add("name", rules(Required(), IsString(), MinLength(2)))
        .add("age", Rules().add(IsInteger()).add(MinValue(18)).default(21))
        .add("address.city", rules(Required(), IsString()))
    )

    match form.validate(document):
        case Ok(values):
            ...   # {"name": ..., "age": 21, "address.city": ...}
        case Err(errors):
            ...   # {"name": [MinLengthError(expected=2, got=1)]}

Fields are checked in registration order. By default every field is checked
and all failures are collected; ``FormValidator.break_on_first_error()``
stops at the first failing field.
"""
from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Union

from formrules.errors import Err, Ok, Result
from formrules.logging import validation_logger

from .base import Outcome, Validator, ValidatorFn, as_validator
from .kinds import ErrorMap
from .rules import Rules

if TYPE_CHECKING:
    from .unique import LookupService

logger = validation_logger()

FormResult = Result[dict[str, Any], ErrorMap]


def resolve_path(document: Any, path: str) -> Any:
    """Look up a dotted path, returning None where the path breaks off."""
    node = document
    for segment in path.split("."):
        if not isinstance(node, Mapping):
            return None
        node = node.get(segment)
    return node


# ============================================================================
# Field Bindings
# ============================================================================

@dataclass(frozen=True, slots=True)
class PlainField:
    """Validator bound to a path; the resolved value is used as is."""
    validator: Validator

    def extract(self, value: Any) -> Any:
        return value

    def validate(self, value: Any) -> Outcome:
        return self.validator.validate(value)

    async def validate_async(self, service: LookupService | None, value: Any) -> Outcome:
        return await self.validator.validate_async(service, value)


@dataclass(frozen=True, slots=True)
class DefaultedField(PlainField):
    """Rules chain with a declared default; a null value becomes the default."""
    default: Any

    def extract(self, value: Any) -> Any:
        return self.default if value is None else value


FieldBinding = Union[PlainField, DefaultedField]


def bind(validator: Validator | ValidatorFn) -> FieldBinding:
    validator = as_validator(validator)
    if isinstance(validator, Rules) and validator.has_default:
        return DefaultedField(validator, validator.default_value)
    return PlainField(validator)


# ============================================================================
# Form Validator
# ============================================================================

@dataclass(frozen=True, slots=True)
class FormValidator:
    """Immutable set of path bindings. ``add`` returns a new FormValidator."""
    break_on_error: bool = False
    bindings: tuple[tuple[str, FieldBinding], ...] = ()

    @classmethod
    def break_on_first_error(cls) -> FormValidator:
        return cls(break_on_error=True)

    def add(self, path: str, validator: Validator | ValidatorFn) -> FormValidator:
        """Bind a validator to a path. Re-adding a path replaces it in place."""
        if not isinstance(path, str) or not path:
            raise ValueError(f"Field path must be a non-empty string, got {path!r}")
        bindings = dict(self.bindings)
        bindings[path] = bind(validator)
        return replace(self, bindings=tuple(bindings.items()))

    @property
    def fields(self) -> list[str]:
        return [path for path, _ in self.bindings]

    def validate(self, document: Any) -> FormResult:
        started = time.perf_counter()
        output: dict[str, Any] = {}
        errors: ErrorMap = {}
        for path, binding in self.bindings:
            value = binding.extract(resolve_path(document, path))
            if self._record(path, value, binding.validate(value), output, errors):
                break
        return self._finish(output, errors, "sync", started)

    async def validate_async(self, service: LookupService | None, document: Any) -> FormResult:
        """Validate with lookup-backed validators enabled.

        Fields are awaited one at a time in registration order.
        """
        started = time.perf_counter()
        output: dict[str, Any] = {}
        errors: ErrorMap = {}
        for path, binding in self.bindings:
            value = binding.extract(resolve_path(document, path))
            if self._record(path, value, await binding.validate_async(service, value), output, errors):
                break
        return self._finish(output, errors, "async", started)

    def _record(self, path: str, value: Any, outcome: Outcome, output: dict[str, Any], errors: ErrorMap) -> bool:
        """Store one field outcome. Returns True when validation should stop."""
        match outcome:
            case Ok(_):
                output[path] = value
                return False
            case Err(kind):
                errors.setdefault(path, []).append(kind)
                return self.break_on_error

    def _finish(self, output: dict[str, Any], errors: ErrorMap, mode: str, started: float) -> FormResult:
        logger.debug(
            "form_validated",
            mode=mode,
            field_count=len(self.bindings),
            error_count=sum(len(kinds) for kinds in errors.values()),
            failed_fields=list(errors),
            break_on_error=self.break_on_error,
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
        )
        return Err(errors) if errors else Ok(output)

    def __len__(self) -> int: return len(self.bindings)
