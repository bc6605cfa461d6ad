"""Structured logging helpers with correlation IDs.

This module provides LoggerAdapter for structured logging with mandatory
fields (correlation_id, operation, status) and module-level loggers with
NullHandler to prevent duplicate handlers in libraries. Handlers are only
configured at the application boundary through :func:`setup_logging`.

Examples
--------
>>> from docsite_common.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Manifest built", extra={"operation": "manifest", "status": "success"})
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping
    from types import TracebackType

    from docsite_common.types import JsonValue

__all__ = [
    "JsonFormatter",
    "LoggerAdapter",
    "get_logger",
    "parse_level",
    "setup_logging",
    "with_fields",
]


# Context variable for correlation ID propagation (async-safe)
_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Formats log records as one JSON object per line with timestamp, level,
    name, message and the structured fields (correlation_id, operation,
    status, duration_ms). Extra fields passed through ``extra`` are included
    when they are JSON-compatible.

    Examples
    --------
    >>> import logging
    >>> handler = logging.StreamHandler()
    >>> handler.setFormatter(JsonFormatter())
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format. May include extra fields in record.__dict__.

        Returns
        -------
        str
            JSON-encoded log entry.
        """
        data: dict[str, JsonValue] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S") + "Z",
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        for field in ("correlation_id", "operation", "status", "duration_ms"):
            value = getattr(record, field, None)
            if value is not None:
                data[field] = value

        if "correlation_id" not in data:
            ctx_correlation_id = _correlation_id.get()
            if ctx_correlation_id is not None:
                data["correlation_id"] = ctx_correlation_id

        for key, value in record.__dict__.items():
            if (
                key not in _RECORD_ATTRIBUTES
                and key not in data
                and not key.startswith("_")
                and value is not None
                and isinstance(value, (str, int, float, bool, list, dict))
            ):
                data[key] = value

        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(data, default=str)


class LoggerAdapter(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Logger adapter that injects structured context fields.

    Fields bound on the adapter are merged into every call's ``extra``
    without overriding keys supplied at the call site. The correlation ID is
    taken from context when not given, and ``operation``/``status`` default
    to ``"unknown"`` and a level-derived status respectively.

    Parameters
    ----------
    logger : logging.Logger
        Base logger instance to wrap.
    extra : Mapping[str, object] | None, optional
        Structured fields to inject into log entries. Defaults to None.
    """

    logger: logging.Logger

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        """Merge bound fields and the context correlation ID into ``extra``.

        Parameters
        ----------
        msg : Any
            Log message.
        kwargs : MutableMapping[str, Any]
            Keyword arguments from the logging call, including ``extra``.

        Returns
        -------
        tuple[Any, MutableMapping[str, Any]]
            The message and kwargs with the merged ``extra`` dict.
        """
        supplied = kwargs.get("extra")
        extra: dict[str, Any] = dict(supplied) if isinstance(supplied, dict) else {}
        if self.extra:
            for key, value in self.extra.items():
                extra.setdefault(key, value)
        if "correlation_id" not in extra:
            ctx_correlation_id = _correlation_id.get()
            if ctx_correlation_id is not None:
                extra["correlation_id"] = ctx_correlation_id
        kwargs["extra"] = extra
        return msg, kwargs

    def log(self, level: int, msg: object, *args: object, **kwargs: Any) -> None:
        """Log a message at ``level`` with structured fields."""
        if not self.isEnabledFor(level):
            return
        msg, processed = self.process(msg, kwargs)
        self._ensure_operation_and_status(processed["extra"], level)
        self.logger.log(level, msg, *args, **processed)

    @staticmethod
    def _ensure_operation_and_status(extra: dict[str, Any], level: int) -> None:
        if "operation" not in extra:
            extra["operation"] = "unknown"
        if "status" not in extra:
            if level >= logging.ERROR:
                extra["status"] = "error"
            elif level >= logging.WARNING:
                extra["status"] = "warning"
            else:
                extra["status"] = "success"


def get_logger(name: str) -> LoggerAdapter:
    """Get a logger adapter with structured logging support.

    Module-level loggers use NullHandler to prevent duplicate handlers
    in libraries. Applications should configure handlers via setup_logging().

    Parameters
    ----------
    name : str
        Logger name (typically __name__ from the calling module).

    Returns
    -------
    LoggerAdapter
        Logger adapter with structured context injection.
    """
    logger = logging.getLogger(name)

    # Add NullHandler if no handlers exist (prevents duplicate handlers in libraries)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return LoggerAdapter(logger, {})


def parse_level(level: str | int) -> int:
    """Return the numeric logging level for ``level``.

    Raises
    ------
    ValueError
        If ``level`` is not a known level name.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelNamesMapping().get(level.strip().upper())
    if resolved is None:
        message = f"Unknown log level: {level!r}"
        raise ValueError(message)
    return resolved


def setup_logging(level: str | int = logging.INFO) -> None:
    """Configure root logger with JSON formatter.

    Sets up structured JSON logging to stderr so command output on stdout
    stays machine-readable. Should be called once at application startup.

    Parameters
    ----------
    level : str | int, optional
        Logging level threshold, as a name or number. Defaults to logging.INFO.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=parse_level(level), handlers=[handler], force=True)


class _WithFieldsContext(AbstractContextManager[LoggerAdapter]):
    """Context manager implementation for `with_fields`."""

    def __init__(
        self, logger: logging.Logger | LoggerAdapter, fields: Mapping[str, object]
    ) -> None:
        self._logger = logger
        self._fields = dict(fields)
        self._token: contextvars.Token[str | None] | None = None

    def __enter__(self) -> LoggerAdapter:
        base_logger = (
            self._logger.logger
            if isinstance(self._logger, LoggerAdapter)
            else self._logger
        )
        inherited = (
            dict(self._logger.extra or {})
            if isinstance(self._logger, LoggerAdapter)
            else {}
        )
        inherited.update(self._fields)
        correlation_id = self._fields.get("correlation_id")
        if isinstance(correlation_id, str):
            self._token = _correlation_id.set(correlation_id)
        return LoggerAdapter(base_logger, inherited)

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        if self._token is not None:
            _correlation_id.reset(self._token)
            self._token = None
        del exc_type, exc_value, exc_tb
        return None


def with_fields(
    logger: logging.Logger | LoggerAdapter,
    **fields: object,
) -> AbstractContextManager[LoggerAdapter]:
    """Context manager for attaching structured fields to log entries.

    Sets correlation_id in contextvars if provided in fields and yields a
    LoggerAdapter with the fields bound. Fields already bound on ``logger``
    are kept unless overridden.

    Parameters
    ----------
    logger : logging.Logger | LoggerAdapter
        Base logger to wrap (may already be an adapter).
    **fields : object
        Structured fields to inject into all log entries.

    Returns
    -------
    AbstractContextManager[LoggerAdapter]
        Context manager that yields the bound adapter.

    Examples
    --------
    >>> from docsite_common.logging import get_logger, with_fields
    >>> logger = get_logger(__name__)
    >>> with with_fields(logger, operation="classify", version="2.19") as log:
    ...     log.info("Classifying release")
    """
    return _WithFieldsContext(logger, fields)
