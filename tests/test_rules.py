"""Tests for Rules chains."""

import pytest

from formrules.errors import Err
from formrules.validation import (
    VALID,
    CustomError,
    CustomValidator,
    IsBoolean,
    IsInteger,
    MinLength,
    MinLengthError,
    MinValue,
    MinValueError,
    Required,
    RequiredError,
    Rules,
    TypeMismatchError,
    invalid,
    rules,
)


class TestRulesValidation:

    def test_chain(self) -> None:
        chain = Rules().add(Required()).add(MinLength(3))
        assert chain.validate("valid").is_ok()
        assert chain.validate("") == Err(MinLengthError(3, 0))
        assert chain.validate(None) == Err(RequiredError())
        assert chain.validate("ab").is_err()

    def test_empty_chain_accepts_anything(self) -> None:
        assert Rules().validate(None).is_ok()
        assert Rules().validate({"any": "thing"}).is_ok()

    def test_short_circuits_on_first_error(self) -> None:
        """Later validators never see a value an earlier one rejected."""
        calls = []

        def spy(value):
            calls.append(value)
            return VALID

        chain = rules(IsInteger(), spy)
        assert chain.validate("x") == Err(TypeMismatchError("int", '"x"'))
        assert calls == []
        assert chain.validate(5).is_ok()
        assert calls == [5]

    def test_bare_callables_are_wrapped(self) -> None:
        def no_spaces(value):
            if isinstance(value, str) and " " in value:
                return invalid(CustomError("No spaces"))
            return VALID

        chain = Rules().add(no_spaces)
        assert isinstance(chain.validators[0], CustomValidator)
        assert chain.validators[0].name == "no_spaces"
        assert chain.validate("a b") == Err(CustomError("No spaces"))

    def test_rejects_non_validators(self) -> None:
        with pytest.raises(TypeError):
            Rules().add(42)


class TestRulesDefault:

    def test_default_replaces_null(self) -> None:
        chain = Rules().add(IsInteger()).add(MinValue(18)).default(21)
        assert chain.validate(None).is_ok()
        assert chain.default_value == 21

    def test_default_is_validated(self) -> None:
        """A default that fails its own chain is reported."""
        chain = Rules().add(MinValue(18)).default(10)
        assert chain.validate(None) == Err(MinValueError(18.0, 10.0))

    def test_default_does_not_replace_present_values(self) -> None:
        chain = Rules().add(IsBoolean()).default(False)
        assert chain.validate("yes") == Err(TypeMismatchError("bool", '"yes"'))

    def test_falsy_default_still_applies(self) -> None:
        chain = Rules().add(Required()).default(False)
        assert chain.has_default
        assert chain.validate(None).is_ok()

    def test_no_default(self) -> None:
        assert Rules().default_value is None
        assert not Rules().has_default


class TestRulesBuilder:

    def test_builders_return_new_chains(self) -> None:
        base = Rules().add(Required())
        extended = base.add(MinLength(3))
        defaulted = extended.default("abc")
        assert len(base) == 1
        assert len(extended) == 2
        assert extended.default_value is None
        assert defaulted.default_value == "abc"

    def test_iteration_in_order(self) -> None:
        chain = rules(Required(), MinLength(3))
        assert [v.name for v in chain] == ["Required", "MinLength"]

    def test_helper_with_default(self) -> None:
        chain = rules(IsBoolean(), default=False)
        assert chain == Rules().add(IsBoolean()).default(False)

    def test_repr(self) -> None:
        assert repr(rules(Required(), default=1)) == "Rules([Required], default=1)"


class TestRulesAsync:

    @pytest.mark.asyncio
    async def test_matches_sync(self) -> None:
        chain = Rules().add(IsInteger()).add(MinValue(18)).default(21)
        for value in (None, 17, 30, "x"):
            assert await chain.validate_async(None, value) == chain.validate(value)
