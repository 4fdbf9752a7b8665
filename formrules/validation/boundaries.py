"""Form Validation at the HTTP Boundary

FastAPI integration: a dependency that validates the JSON request body
against a ``FormValidator`` and hands the route the validated values, and an
exception handler that turns failures into a structured 422 response.

Usage:
    signup = FormValidator().add("email", rules(Required(), EmailValidator()))

    app = FastAPI()
    register_error_handlers(app)

    @app.post("/signup")
    async def create(values: dict = validated_form(signup, lookup=lookup_service)):
        ...
"""
from __future__ import annotations

import json
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from formrules.errors import Err, Ok
from formrules.logging import api_logger

from .form import FormValidator
from .kinds import ErrorMap, errors_to_wire
from .unique import LookupService

log = api_logger()


class FormValidationFailed(Exception):
    """Raised by the FastAPI dependency when a request body is rejected."""

    def __init__(self, errors: ErrorMap):
        self.errors = errors
        super().__init__(f"Validation failed for {len(errors)} field(s): {', '.join(errors)}")

    @property
    def error_count(self) -> int:
        return sum(len(kinds) for kinds in self.errors.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "type": "validation_error",
                "error_count": self.error_count,
                "errors": errors_to_wire(self.errors),
            }
        }


class ValidatedForm:
    """FastAPI dependency returning the validated values of the request body."""

    __slots__ = ("form", "lookup")

    def __init__(self, form: FormValidator, lookup: LookupService | None = None):
        self.form, self.lookup = form, lookup

    async def __call__(self, request: Request) -> dict[str, Any]:
        try:
            document = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise HTTPException(status_code=400, detail=f"Invalid JSON in request body: {e}") from e

        if self.lookup is None:
            result = self.form.validate(document)
        else:
            result = await self.form.validate_async(self.lookup, document)

        match result:
            case Ok(values):
                return values
            case Err(errors):
                raise FormValidationFailed(errors)


def validated_form(form: FormValidator, lookup: LookupService | None = None) -> Any:
    """FastAPI dependency factory for a validated form body.

    With a lookup service the async path runs, enabling ``UniqueValidator``.
    """
    return Depends(ValidatedForm(form, lookup))


async def form_validation_failed_handler(request: Request, exc: FormValidationFailed) -> JSONResponse:
    log.info(
        "form_rejected",
        path=request.url.path,
        method=request.method,
        failed_fields=list(exc.errors),
        error_count=exc.error_count,
        correlation_id=request.headers.get("X-Correlation-ID", ""),
    )
    return JSONResponse(status_code=422, content=exc.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    """Register form validation handlers on a FastAPI app.

    Usage:
        app = FastAPI(...)
        register_error_handlers(app)
    """
    app.add_exception_handler(FormValidationFailed, form_validation_failed_handler)
