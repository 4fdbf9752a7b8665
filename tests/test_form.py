"""Tests for FormValidator."""

import pytest
from structlog.testing import capture_logs

from formrules.errors import Err, Ok
from formrules.validation import (
    VALID,
    CustomError,
    DefaultedField,
    EmailError,
    EmailValidator,
    FormValidator,
    IsBoolean,
    IsInteger,
    IsString,
    MaxValue,
    MinLength,
    MinLengthError,
    MinValue,
    PlainField,
    Required,
    RequiredError,
    Rules,
    invalid,
    resolve_path,
    rules,
)


def has_uppercase(value):
    if isinstance(value, str) and not any(c.isupper() for c in value):
        return invalid(CustomError("Must contain uppercase"))
    return VALID


class TestResolvePath:

    def test_flat_key(self) -> None:
        assert resolve_path({"name": "Ada"}, "name") == "Ada"

    def test_nested_key(self) -> None:
        assert resolve_path({"settings": {"notifications": True}}, "settings.notifications") is True

    def test_deeply_nested(self) -> None:
        assert resolve_path({"a": {"b": {"c": 3}}}, "a.b.c") == 3

    @pytest.mark.parametrize(
        ("document", "path"),
        [
            ({}, "name"),
            ({"settings": {}}, "settings.notifications"),
            ({"settings": "off"}, "settings.notifications"),
            ({"settings": [1, 2]}, "settings.0"),
            ([1, 2], "name"),
            ("text", "name"),
            (None, "a.b"),
        ],
    )
    def test_broken_paths_resolve_to_none(self, document, path) -> None:
        assert resolve_path(document, path) is None


class TestFormValidation:

    def test_success(self) -> None:
        form = (
            FormValidator()
            .add("username", Rules().add(Required()).add(MinLength(3)))
            .add("age", Rules().add(IsInteger()).add(MaxValue(120.0)))
        )
        assert form.validate({"username": "testuser", "age": 25}) == Ok({"username": "testuser", "age": 25})

    def test_collects_all_errors(self) -> None:
        form = (
            FormValidator()
            .add("email", Rules().add(Required()).add(EmailValidator()))
            .add("password", Rules().add(Required()).add(MinLength(8)))
        )
        errors = form.validate({"email": "invalid-email", "password": "short"}).unwrap_err()
        assert errors == {
            "email": [EmailError("invalid-email")],
            "password": [MinLengthError(8, 5)],
        }

    def test_missing_required_field(self) -> None:
        form = FormValidator().add("username", rules(Required())).add("email", rules(Required()))
        assert form.validate({"username": "testuser"}) == Err({"email": [RequiredError()]})

    def test_break_on_first_error(self) -> None:
        form = (
            FormValidator.break_on_first_error()
            .add("email", Rules().add(EmailValidator()))
            .add("password", Rules().add(Required()).add(MinLength(8)))
        )
        assert form.validate({"email": "invalid-email", "password": "short"}) == Err(
            {"email": [EmailError("invalid-email")]}
        )

    def test_break_mode_without_errors_checks_everything(self) -> None:
        form = FormValidator.break_on_first_error().add("a", rules(Required())).add("b", rules(Required()))
        assert form.validate({"a": 1, "b": 2}) == Ok({"a": 1, "b": 2})

    def test_nested_paths(self) -> None:
        form = (
            FormValidator()
            .add("user", Rules().add(Required()).add(MinLength(3)))
            .add("settings.notifications", Rules().add(Required()))
        )
        valid = {"user": "testuser", "settings": {"notifications": True}}
        assert form.validate(valid) == Ok({"user": "testuser", "settings.notifications": True})

        errors = form.validate({"user": "tu", "settings": {}}).unwrap_err()
        assert errors == {"user": [MinLengthError(3, 2)], "settings.notifications": [RequiredError()]}

    def test_custom_callable_in_chain(self) -> None:
        form = FormValidator().add("password", rules(Required(), MinLength(8), has_uppercase))
        assert form.validate({"password": "SecurePass123"}).is_ok()
        assert form.validate({"password": "weakpass123"}) == Err(
            {"password": [CustomError("Must contain uppercase")]}
        )

    def test_bare_validator(self) -> None:
        form = FormValidator().add("name", IsString()).add("code", has_uppercase)
        assert form.validate({"name": 1, "code": "abc"}).unwrap_err().keys() == {"name", "code"}

    def test_optional_field_passes_through_as_none(self) -> None:
        form = FormValidator().add("nickname", rules(IsString()))
        assert form.validate({}) == Ok({"nickname": None})

    def test_non_mapping_document(self) -> None:
        form = FormValidator().add("name", rules(Required()))
        assert form.validate(["not", "a", "mapping"]) == Err({"name": [RequiredError()]})

    def test_empty_form(self) -> None:
        assert FormValidator().validate({"anything": 1}) == Ok({})

    def test_idempotent(self) -> None:
        form = FormValidator().add("name", rules(Required(), MinLength(3))).add("age", rules(MinValue(18)))
        document = {"name": "Al", "age": 12}
        assert form.validate(document) == form.validate(document)

    def test_output_order_follows_registration(self) -> None:
        form = FormValidator().add("b", rules(Required())).add("a", rules(Required())).add("c", rules(Required()))
        assert list(form.validate({"a": 1, "b": 2, "c": 3}).unwrap()) == ["b", "a", "c"]

    def test_break_mode_stops_at_first_registered_failure(self) -> None:
        form = (
            FormValidator.break_on_first_error()
            .add("first", rules(Required()))
            .add("second", rules(Required()))
        )
        assert list(form.validate({}).unwrap_err()) == ["first"]


class TestFormDefaults:

    def test_default_applied_and_returned(self) -> None:
        form = (
            FormValidator()
            .add("name", Rules().add(Required()).add(IsString()))
            .add("active", Rules().add(IsBoolean()).default(False))
        )
        assert form.validate({"name": "Ali"}) == Ok({"name": "Ali", "active": False})

    def test_default_for_nested_path(self) -> None:
        form = FormValidator().add("settings.theme", rules(IsString(), default="light"))
        assert form.validate({"settings": {}}) == Ok({"settings.theme": "light"})

    def test_present_value_wins(self) -> None:
        form = FormValidator().add("active", rules(IsBoolean(), default=False))
        assert form.validate({"active": True}) == Ok({"active": True})

    def test_failing_default_is_reported(self) -> None:
        form = FormValidator().add("age", rules(MinValue(18), default=10))
        assert form.validate({}).is_err()

    def test_bindings(self) -> None:
        """Only chains that declare a default are bound as defaulted."""
        form = (
            FormValidator()
            .add("plain", rules(IsString()))
            .add("bare", IsString())
            .add("defaulted", rules(IsString(), default="x"))
        )
        bindings = dict(form.bindings)
        assert type(bindings["plain"]) is PlainField
        assert type(bindings["bare"]) is PlainField
        assert bindings["defaulted"] == DefaultedField(rules(IsString(), default="x"), "x")


class TestFormBuilder:

    def test_add_returns_new_validator(self) -> None:
        base = FormValidator().add("a", rules(Required()))
        extended = base.add("b", rules(Required()))
        assert base.fields == ["a"]
        assert extended.fields == ["a", "b"]

    def test_readding_path_replaces_in_place(self) -> None:
        form = (
            FormValidator()
            .add("a", rules(Required()))
            .add("b", rules(Required()))
            .add("a", rules(MinLength(3)))
        )
        assert form.fields == ["a", "b"]
        assert form.validate({"a": "xy", "b": 1}) == Err({"a": [MinLengthError(3, 2)]})

    def test_break_mode_is_preserved(self) -> None:
        assert FormValidator.break_on_first_error().add("a", rules()).break_on_error

    @pytest.mark.parametrize("path", ["", None, 5])
    def test_invalid_path(self, path) -> None:
        with pytest.raises(ValueError):
            FormValidator().add(path, rules())

    def test_len(self) -> None:
        assert len(FormValidator().add("a", rules()).add("b", rules())) == 2


class TestFormLogging:

    def test_logs_summary_event(self) -> None:
        form = FormValidator().add("name", rules(Required())).add("age", rules(MinValue(18)))
        with capture_logs() as logs:
            form.validate({"age": 3})

        events = [e for e in logs if e["event"] == "form_validated"]
        assert len(events) == 1
        event = events[0]
        assert event["mode"] == "sync"
        assert event["field_count"] == 2
        assert event["error_count"] == 2
        assert event["failed_fields"] == ["name", "age"]
        assert event["duration_ms"] >= 0
