"""Result types and lookup-service faults.

Every validator returns a ``Result``: ``Ok(None)`` when the value is accepted,
``Err(kind)`` carrying an ``ErrorKind`` otherwise. Lookup services return
``Result[int, ServiceError]``.

Usage:
    from formrules.errors import Ok, Err

    match validator.validate(value):
        case Ok(_):
            ...
        case Err(kind):
            log.info("rejected", tag=kind.tag)
"""
from .types import (
    Result,
    Ok,
    Err,
    ServiceError,
    ErrorCode,
)

from .builders import (
    service_error,
    timeout_error,
    db_error,
    db_connection_failed,
    query_failed,
    unknown_collection,
)

from .boundaries import (
    ErrorMapper,
    DatabaseErrorMapper,
    map_errors,
    map_db_errors,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "ServiceError",
    "ErrorCode",
    "service_error",
    "timeout_error",
    "db_error",
    "db_connection_failed",
    "query_failed",
    "unknown_collection",
    "ErrorMapper",
    "DatabaseErrorMapper",
    "map_errors",
    "map_db_errors",
]
