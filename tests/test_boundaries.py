"""Tests for the FastAPI form validation boundary."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from formrules.validation import (
    EmailValidator,
    FormValidator,
    InMemoryLookupService,
    IsBoolean,
    MinLength,
    MinLengthError,
    Required,
    RequiredError,
    UniqueValidator,
    rules,
)
from formrules.validation.boundaries import FormValidationFailed, register_error_handlers, validated_form


def build_app(lookup: InMemoryLookupService) -> FastAPI:
    signup = (
        FormValidator()
        .add("email", rules(Required(), EmailValidator()))
        .add("password", rules(Required(), MinLength(8)))
        .add("newsletter", rules(IsBoolean(), default=False))
    )
    unique_signup = signup.add("email", rules(Required(), EmailValidator(), UniqueValidator("users", "email")))

    app = FastAPI()
    register_error_handlers(app)

    @app.post("/signup")
    async def create(values: dict = validated_form(signup)):
        return values

    @app.post("/signup/unique")
    async def create_unique(values: dict = validated_form(unique_signup, lookup=lookup)):
        return values

    return app


@pytest.fixture
def client(lookup) -> TestClient:
    return TestClient(build_app(lookup))


class TestValidatedForm:

    def test_valid_body(self, client) -> None:
        response = client.post("/signup", json={"email": "new@example.com", "password": "long enough"})
        assert response.status_code == 200
        assert response.json() == {"email": "new@example.com", "password": "long enough", "newsletter": False}

    def test_invalid_body(self, client) -> None:
        response = client.post("/signup", json={"email": "bad", "password": "short"})
        assert response.status_code == 422
        assert response.json() == {
            "error": {
                "type": "validation_error",
                "error_count": 2,
                "errors": {
                    "email": [["email_error", ["bad"]]],
                    "password": [["min_len_error", [8, 5]]],
                },
            }
        }

    def test_missing_fields(self, client) -> None:
        response = client.post("/signup", json={})
        assert response.status_code == 422
        assert response.json()["error"]["errors"] == {
            "email": ["required_error"],
            "password": ["required_error"],
        }

    def test_malformed_json(self, client) -> None:
        response = client.post("/signup", content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400

    def test_lookup_enables_unique(self, client) -> None:
        response = client.post("/signup/unique", json={"email": "taken@example.com", "password": "long enough"})
        assert response.status_code == 422
        assert response.json()["error"]["errors"] == {"email": ["unique_error"]}

        response = client.post("/signup/unique", json={"email": "free@example.com", "password": "long enough"})
        assert response.status_code == 200


class TestFormValidationFailed:

    def test_to_dict(self) -> None:
        exc = FormValidationFailed({"name": [RequiredError()], "bio": [MinLengthError(10, 3)]})
        assert exc.error_count == 2
        assert exc.to_dict()["error"]["errors"] == {
            "name": ["required_error"],
            "bio": [["min_len_error", [10, 3]]],
        }

    def test_message_names_fields(self) -> None:
        assert "name" in str(FormValidationFailed({"name": [RequiredError()]}))
