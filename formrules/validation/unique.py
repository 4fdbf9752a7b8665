"""Uniqueness Validation

``UniqueValidator`` is the one built-in that needs I/O: it asks a
``LookupService`` how many stored records already hold the value. It only
works through ``validate_async``; the synchronous path rejects every non-null
value with ``AsyncRequiredError``.

Service faults never surface as exceptions here. A service returns
``Err(ServiceError)`` and the validator reports ``CustomError("Database error")``
for the field, logging the underlying fault.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from formrules.errors import Ok, Result, ServiceError, unknown_collection
from formrules.logging import db_logger

from .base import VALID, Outcome, Validator, invalid, is_number, values_equal
from .kinds import AsyncRequiredError, CustomError, TypeMismatchError, UniqueError, render

logger = db_logger()


@runtime_checkable
class LookupService(Protocol):
    """Counts stored records whose ``field`` equals ``value``."""

    async def count(
        self,
        collection: str,
        field: str,
        value: str | int | float,
        exclude: Any = None,
    ) -> Result[int, ServiceError]:
        """Matching record count, skipping the record identified by ``exclude``."""
        ...


@dataclass(frozen=True, slots=True)
class UniqueValidator(Validator):
    """Value must not already exist in ``collection.field``.

    Usage:
        form = FormValidator().add("email", rules(Required(), UniqueValidator("users", "email")))
        result = await form.validate_async(lookup, document)

    ``exclude`` identifies the record being updated so it does not collide
    with itself.
    """
    collection: str
    field: str
    exclude: Any = None

    def validate(self, value: Any) -> Outcome:
        if value is None: return VALID
        return invalid(AsyncRequiredError())

    async def validate_async(self, service: LookupService | None, value: Any) -> Outcome:
        if value is None: return VALID
        if not (isinstance(value, str) or is_number(value)):
            return invalid(TypeMismatchError(expected="string or number", got=render(value)))
        if service is None:
            return invalid(AsyncRequiredError("Lookup service required"))

        match await service.count(self.collection, self.field, value, self.exclude):
            case Ok(count):
                return invalid(UniqueError()) if count > 0 else VALID
            case error_result:
                fault = error_result.unwrap_err()
                logger.warning(
                    "unique_lookup_failed",
                    collection=self.collection,
                    field=self.field,
                    error_code=fault.code.name,
                    error=fault.message,
                    origin=fault.origin,
                )
                return invalid(CustomError("Database error"))


class InMemoryLookupService:
    """Dictionary-backed lookup service.

    Records are plain mappings grouped by collection name; ``id_key`` names
    the identity field compared against ``exclude``.
    """

    def __init__(self, collections: dict[str, list[dict]] | None = None, id_key: str = "id"):
        self.collections: dict[str, list[dict]] = {
            name: list(records) for name, records in (collections or {}).items()
        }
        self.id_key = id_key

    def insert(self, collection: str, record: dict) -> None:
        self.collections.setdefault(collection, []).append(record)

    async def count(
        self,
        collection: str,
        field: str,
        value: str | int | float,
        exclude: Any = None,
    ) -> Result[int, ServiceError]:
        if collection not in self.collections:
            return unknown_collection(collection, origin="lookup.memory")
        return Ok(sum(
            1 for record in self.collections[collection]
            if field in record
            and values_equal(record[field], value)
            and (exclude is None or not values_equal(record.get(self.id_key), exclude))
        ))
