"""Error Boundary Mappers

Lookup services talk to drivers that raise their own exception types. Each
service maps those exceptions to a ``ServiceError`` at its boundary so the
uniqueness validator only ever sees ``Result`` values.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import wraps
from typing import Awaitable, Callable, Generic, TypeVar

from sqlalchemy.exc import (
    IntegrityError,
    NoSuchTableError,
    OperationalError,
    ProgrammingError,
    SQLAlchemyError,
)

from .types import Err, Ok, Result, ServiceError
from .builders import (
    db_connection_failed,
    db_error,
    query_failed,
    timeout_error,
    unknown_collection,
)

T = TypeVar("T")


class ErrorMapper(ABC, Generic[T]):
    """Abstract base for error mappers at service boundaries."""

    handles: tuple[type[Exception], ...] = ()
    origin: str = ""

    @abstractmethod
    def map_exception(self, exc: Exception) -> ServiceError:
        """Map a driver exception to a boundary error."""

    def map_error(self, error: ServiceError) -> ServiceError:
        return error if error.origin else error.with_origin(self.origin)

    def map_result(self, result: Result[T, ServiceError]) -> Result[T, ServiceError]:
        """Map errors in Result while preserving success values."""
        match result:
            case Ok(_):
                return result
            case Err(e):
                return Err(self.map_error(e))


class DatabaseErrorMapper(ErrorMapper[T]):
    """Maps SQLAlchemy exceptions to ServiceError."""

    handles = (SQLAlchemyError,)

    def __init__(self, origin: str = "database"):
        self.origin = origin

    def map_exception(self, exc: Exception) -> ServiceError:
        if isinstance(exc, OperationalError):
            return self._map_operational_error(exc)
        if isinstance(exc, (NoSuchTableError, ProgrammingError)):
            return query_failed(str(exc), origin=self.origin, cause=exc).error
        if isinstance(exc, IntegrityError):
            return db_error(f"Constraint violation: {exc.orig or exc}", origin=self.origin, cause=exc).error
        return db_error(f"Database error: {exc}", origin=self.origin, cause=exc).error

    def _map_operational_error(self, exc: OperationalError) -> ServiceError:
        """Map operational/connection errors."""
        message = str(exc.orig) if exc.orig else str(exc)
        lowered = message.lower()

        if "timeout" in lowered:
            return timeout_error("database query", 30.0, origin=self.origin).error

        # sqlite reports a missing table as an operational error
        if "no such table" in lowered or "no such column" in lowered:
            return unknown_collection(message, origin=self.origin).error

        if "connection" in lowered or "connect" in lowered or "unable to open" in lowered:
            return db_connection_failed(message, origin=self.origin, cause=exc).error

        return query_failed(message, origin=self.origin, cause=exc).error


def map_errors(mapper: ErrorMapper[T]):
    """Decorator to map driver exceptions at async service boundaries.

    Usage:
        @map_errors(DatabaseErrorMapper("lookup.sql"))
        async def count(...) -> Result[int, ServiceError]:
            ...
    """
    def decorator(fn: Callable[..., Awaitable[Result[T, ServiceError]]]):
        @wraps(fn)
        async def wrapper(*args, **kwargs) -> Result[T, ServiceError]:
            try:
                result = await fn(*args, **kwargs)
            except mapper.handles as e:
                return Err(mapper.map_exception(e))
            return mapper.map_result(result)
        return wrapper
    return decorator


def map_db_errors(origin: str = "database"):
    """Convenience decorator for database error mapping."""
    return map_errors(DatabaseErrorMapper(origin))
