"""Validator Capability

A validator checks one document value and returns an ``Outcome``:
``VALID`` (``Ok(None)``) or ``Err(ErrorKind)``.

Validators have a mandatory synchronous ``validate`` and an asynchronous
``validate_async`` that runs the synchronous form unless overridden. Only
validators that genuinely need an external lookup override it, so every pure
validator participates in the async path unchanged.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Union

from formrules.errors import Err, Ok, Result

from .kinds import ErrorKind

if TYPE_CHECKING:
    from .unique import LookupService

Value = Union[None, bool, int, float, str, list, dict]
Outcome = Result[None, ErrorKind]
ValidatorFn = Callable[[Any], Outcome]

VALID: Outcome = Ok(None)


def invalid(kind: ErrorKind) -> Outcome:
    return Err(kind)


class Validator(ABC):
    """Base class for every validator.

    Contract:
        - validate() is pure with respect to its input
        - validate() never raises for bad input; failures are Err values
        - validate_async() consults the lookup service only when overridden
    """

    @abstractmethod
    def validate(self, value: Any) -> Outcome:
        """Validate a value."""

    async def validate_async(self, service: LookupService | None, value: Any) -> Outcome:
        return self.validate(value)

    @property
    def name(self) -> str:
        """Human-readable name for logging."""
        return type(self).__name__

    def __call__(self, value: Any) -> Outcome: return self.validate(value)


@dataclass(frozen=True, slots=True)
class CustomValidator(Validator):
    """Validator backed by a plain function.

    Usage:
        def has_uppercase(value) -> Outcome:
            if isinstance(value, str) and value.islower():
                return invalid(CustomError("Must contain uppercase"))
            return VALID

        validator = CustomValidator(has_uppercase, label="uppercase")
    """
    validator_fn: ValidatorFn
    label: str = "custom"

    @property
    def name(self) -> str:
        return self.label

    def validate(self, value: Any) -> Outcome:
        return self.validator_fn(value)


def custom(label: str) -> Callable[[ValidatorFn], CustomValidator]:
    """Decorator to create a custom validator from a function.

    Usage:
        @custom("even")
        def is_even(value) -> Outcome:
            if isinstance(value, int) and value % 2:
                return invalid(CustomError("Must be even"))
            return VALID
    """
    return lambda fn: CustomValidator(fn, label=label)


def as_validator(candidate: Validator | ValidatorFn) -> Validator:
    """Accept validators and bare callables alike."""
    if isinstance(candidate, Validator):
        return candidate
    if callable(candidate):
        return CustomValidator(candidate, label=getattr(candidate, "__name__", "custom"))
    raise TypeError(f"Expected a Validator or callable, got {type(candidate).__name__}")


# ============================================================================
# Value helpers
# ============================================================================

def is_number(value: Any) -> bool:
    """int or float, never bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def values_equal(left: Any, right: Any) -> bool:
    """Document equality that keeps bool, int and float distinct."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_integer(left) or is_integer(right):
        return is_integer(left) and is_integer(right) and left == right
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(values_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(values_equal(v, right[k]) for k, v in left.items())
    return type(left) is type(right) and left == right


def contains_value(values: tuple[Any, ...], candidate: Any) -> bool:
    return any(values_equal(v, candidate) for v in values)
