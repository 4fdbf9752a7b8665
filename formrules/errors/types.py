"""Monadic Result Types

Ok/Err containers used for every validator outcome and every lookup-service
call. Validation failures and service faults are values, not exceptions, so a
form validation pass never unwinds halfway through a document.

    match service_result:
        case Ok(count):
            ...
        case Err(fault):
            log.warning("lookup_failed", error=fault.message)
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union, final
from uuid import uuid4

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


class ErrorCode(Enum):
    """Faults raised by a lookup service's backing store.

    E1xxx: Network / remote service
    E4xxx: Database
    E9xxx: Internal
    """
    E1000_NETWORK_GENERIC = 1000
    E1002_TIMEOUT = 1002
    E1010_EXTERNAL_SERVICE_UNAVAILABLE = 1010
    E1011_EXTERNAL_SERVICE_ERROR = 1011

    E4000_DATABASE_GENERIC = 4000
    E4001_CONNECTION_FAILED = 4001
    E4002_QUERY_FAILED = 4002
    E4021_SCHEMA_MISMATCH = 4021

    E9000_INTERNAL_GENERIC = 9000

    @property
    def category(self) -> str:
        match self.value // 1000:
            case 1: return "network"
            case 4: return "database"
            case _: return "internal"


@dataclass(frozen=True, slots=True)
class ServiceError:
    """Fault reported by a lookup service.

    ``origin`` names the service/operation that failed (``lookup.sql``),
    ``correlation_id`` ties the log line of the fault to the field error it
    produced.
    """
    code: ErrorCode
    message: str
    origin: str = ""
    correlation_id: str = field(default_factory=lambda: uuid4().hex[:8])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    def with_origin(self, origin: str) -> ServiceError:
        return replace(self, origin=origin)

    def with_metadata(self, **kwargs) -> ServiceError:
        return replace(self, metadata={**self.metadata, **kwargs})

    def to_dict(self) -> dict:
        return {
            "code": self.code.name,
            "code_num": self.code.value,
            "category": self.code.category,
            "message": self.message,
            "origin": self.origin,
            "correlation_id": self.correlation_id,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message} (correlation_id={self.correlation_id})"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool: return True

    def is_err(self) -> bool: return False

    def unwrap(self) -> T: return self.value

    def unwrap_or(self, default: T) -> T: return self.value

    def unwrap_err(self) -> NoReturn:
        raise ValueError(f"Called unwrap_err on Ok: {self.value!r}")

    def map(self, f: Callable[[T], U]) -> Result[U, Any]:
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], F]) -> Result[T, F]:
        return self

    def and_then(self, f: Callable[[T], Result[U, Any]]) -> Result[U, Any]:
        return f(self.value)


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool: return False

    def is_err(self) -> bool: return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T: return default

    def unwrap_err(self) -> E: return self.error

    def map(self, f: Callable[[Any], U]) -> Result[U, E]:
        return self

    def map_err(self, f: Callable[[E], F]) -> Result[Any, F]:
        return Err(f(self.error))

    def and_then(self, f: Callable[[Any], Result[U, E]]) -> Result[U, E]:
        return self


Result = Union[Ok[T], Err[E]]
