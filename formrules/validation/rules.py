"""Rules: an ordered validator chain with an optional default.

    age = Rules().add(IsInteger()).add(MinValue(18)).default(21)
    age.validate(None)   # default 21 is substituted, then validated
    age.validate(17)     # Err(MinValueError(expected=18.0, got=17.0))

The chain short-circuits on the first failing validator. The default replaces
the input only when the input is ``None`` and always runs through the chain,
so a default that fails its own validators is reported, not silently kept.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Iterator

from .base import VALID, Outcome, Validator, ValidatorFn, as_validator

if TYPE_CHECKING:
    from .unique import LookupService


@dataclass(frozen=True, slots=True)
class Rules(Validator):
    """Immutable validator chain. Builder methods return a new Rules."""
    validators: tuple[Validator, ...] = ()
    default_value: Any = None

    def add(self, validator: Validator | ValidatorFn) -> Rules:
        """Append a validator to the chain."""
        return replace(self, validators=(*self.validators, as_validator(validator)))

    def default(self, value: Any) -> Rules:
        """Value substituted when the input is null."""
        return replace(self, default_value=value)

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    def with_default(self, value: Any) -> Any:
        """The value the chain actually validates."""
        return self.default_value if value is None else value

    def validate(self, value: Any) -> Outcome:
        value = self.with_default(value)
        for validator in self.validators:
            if (outcome := validator.validate(value)).is_err(): return outcome
        return VALID

    async def validate_async(self, service: LookupService | None, value: Any) -> Outcome:
        value = self.with_default(value)
        for validator in self.validators:
            if (outcome := await validator.validate_async(service, value)).is_err(): return outcome
        return VALID

    def __len__(self) -> int: return len(self.validators)

    def __iter__(self) -> Iterator[Validator]: return iter(self.validators)

    def __repr__(self) -> str:
        names = ", ".join(v.name for v in self.validators)
        suffix = f", default={self.default_value!r}" if self.has_default else ""
        return f"Rules([{names}]{suffix})"


def rules(*validators: Validator | ValidatorFn, default: Any = None) -> Rules:
    """Build a Rules chain in one call.

    Usage:
        password = rules(Required(), MinLength(8), has_uppercase)
    """
    return Rules(tuple(as_validator(v) for v in validators), default)
