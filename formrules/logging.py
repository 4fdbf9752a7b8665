"""Structured Logging for formrules

Validation passes, uniqueness lookups and HTTP rejections are logged as
structlog events under the ``formrules.*`` logger names:

    formrules.validation   form_validated (field/error counts, failed fields, duration)
    formrules.db           unique_lookup, unique_lookup_failed
    formrules.api          form_rejected

Applications that already configure structlog get these events through their
own pipeline and should not call ``configure_logging``. It is for applications
that do not: it calls ``structlog.configure``, which is process-wide and
replaces any existing structlog pipeline, then installs a console or JSON
handler on the ``formrules`` stdlib logger. The root stdlib logger is left
alone.
"""
import logging
import sys
from typing import TextIO

import structlog
from structlog.types import EventDict, Processor

LIBRARY_LOGGER = "formrules"
SENSITIVE_KEYS = frozenset({"password", "password_confirmation", "token", "secret", "authorization", "api_key"})
MAX_LISTED_FIELDS = 20


def _redact_sensitive_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask values stored under sensitive keys, at any nesting depth up to 5."""

    def _mask(node, depth: int):
        if depth > 5:
            return node
        if isinstance(node, dict):
            return {
                key: "[REDACTED]" if str(key).lower() in SENSITIVE_KEYS else _mask(value, depth + 1)
                for key, value in node.items()
            }
        if isinstance(node, (list, tuple)):
            return [_mask(item, depth + 1) for item in node]
        return node

    return _mask(event_dict, 0)


def _cap_field_lists(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Keep ``failed_fields`` readable for very large forms."""
    fields = event_dict.get("failed_fields")
    if isinstance(fields, list) and len(fields) > MAX_LISTED_FIELDS:
        hidden = len(fields) - MAX_LISTED_FIELDS
        event_dict["failed_fields"] = [*fields[:MAX_LISTED_FIELDS], f"... +{hidden} more"]
    return event_dict


def _add_library_info(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    from formrules import __version__

    event_dict.setdefault("library", LIBRARY_LOGGER)
    event_dict.setdefault("library_version", __version__)
    return event_dict


def get_shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _add_library_info,
        _cap_field_lists,
        _redact_sensitive_fields,
    ]


def _renderer(json_logs: bool) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True, exception_formatter=structlog.dev.plain_traceback)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    log_sql: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route formrules events through stdlib logging with a structlog renderer.

    Installs a process-wide structlog configuration. Hosts with their own
    structlog setup should skip this and keep their pipeline.

    Args:
        level: Level for the ``formrules`` loggers (DEBUG shows every form_validated event)
        json_logs: JSON lines instead of colored console output
        log_sql: Also emit SQLAlchemy statements issued by SqlLookupService
        stream: Output stream, stdout by default

    Returns the installed handler so callers can remove it again.
    """
    shared_processors = get_shared_processors()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer(json_logs)],
    ))

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.handlers = [handler]
    library_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    library_logger.propagate = False

    sql_logger = logging.getLogger("sqlalchemy.engine")
    sql_logger.setLevel(logging.INFO if log_sql else logging.WARNING)
    if log_sql and handler not in sql_logger.handlers:
        sql_logger.addHandler(handler)
    return handler


def configure_from_settings() -> logging.Handler:
    """configure_logging driven by FORMRULES_LOG_* environment settings."""
    from formrules.config import get_settings

    settings = get_settings()
    return configure_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON, log_sql=settings.LOG_SQL)


class LoggerRegistry:
    """One lazily created logger per formrules component."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, component: str) -> structlog.stdlib.BoundLogger:
        if component not in cls._loggers:
            cls._loggers[component] = structlog.get_logger(f"{LIBRARY_LOGGER}.{component}")
        return cls._loggers[component]


def validation_logger() -> structlog.stdlib.BoundLogger:
    return LoggerRegistry.get("validation")


def db_logger() -> structlog.stdlib.BoundLogger:
    return LoggerRegistry.get("db")


def api_logger() -> structlog.stdlib.BoundLogger:
    return LoggerRegistry.get("api")
