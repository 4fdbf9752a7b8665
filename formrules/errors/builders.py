"""Service Error Builders

Ergonomic constructors for lookup-service faults. Each builder returns an
``Err`` wrapping a ``ServiceError`` with the matching code.
"""
from .types import ErrorCode, Err, ServiceError


def service_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E1011_EXTERNAL_SERVICE_ERROR,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[ServiceError]:
    """Create a generic lookup-service error."""
    return Err(ServiceError(
        code=code,
        message=message,
        origin=origin,
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    ))


def timeout_error(operation: str, timeout_seconds: float, origin: str = "") -> Err[ServiceError]:
    return service_error(
        f"Operation '{operation}' timed out after {timeout_seconds}s",
        code=ErrorCode.E1002_TIMEOUT,
        origin=origin,
        operation=operation,
        timeout_seconds=timeout_seconds,
    )


def db_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E4000_DATABASE_GENERIC,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[ServiceError]:
    """Create database error."""
    return service_error(message, code=code, origin=origin, cause=cause, **metadata)


def db_connection_failed(reason: str, origin: str = "", cause: Exception | None = None) -> Err[ServiceError]:
    return db_error(
        f"Database connection failed: {reason}",
        code=ErrorCode.E4001_CONNECTION_FAILED,
        origin=origin,
        cause=cause,
    )


def query_failed(reason: str, origin: str = "", cause: Exception | None = None) -> Err[ServiceError]:
    return db_error(
        f"Query failed: {reason}",
        code=ErrorCode.E4002_QUERY_FAILED,
        origin=origin,
        cause=cause,
    )


def unknown_collection(collection: str, origin: str = "") -> Err[ServiceError]:
    return db_error(
        f"Unknown collection '{collection}'",
        code=ErrorCode.E4021_SCHEMA_MISMATCH,
        origin=origin,
        collection=collection,
    )
