# ruff: noqa: PLR6301
"""Logging helpers for sqlbulk.

Every logger lives under the ``sqlbulk`` namespace. A correlation ID held in a context
variable is attached to records so the statements built and executed for one logical
operation can be followed across log lines.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from sqlbulk.utils.serializers import to_json

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = (
    "DEFAULT_STATEMENT_PREVIEW_LENGTH",
    "CorrelationIDFilter",
    "StructuredFormatter",
    "configure_logging",
    "correlation_id_var",
    "get_correlation_id",
    "get_logger",
    "log_with_context",
    "set_correlation_id",
    "statement_preview",
)

ROOT_LOGGER_NAME = "sqlbulk"
DEFAULT_STATEMENT_PREVIEW_LENGTH = 200

correlation_id_var: ContextVar[str | None] = ContextVar("sqlbulk_correlation_id", default=None)


def set_correlation_id(correlation_id: str | None) -> None:
    """Bind ``correlation_id`` to the current context; ``None`` clears it."""
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> str | None:
    """Return the correlation ID bound to the current context, if any."""
    return correlation_id_var.get()


def statement_preview(sql: str, max_length: int = DEFAULT_STATEMENT_PREVIEW_LENGTH) -> str:
    """Shorten statement text for log output.

    Args:
        sql: Statement text.
        max_length: Longest preview returned, ellipsis included.

    Returns:
        ``sql`` unchanged when short enough, otherwise its head followed by ``...``.
    """
    if len(sql) <= max_length:
        return sql
    return f"{sql[: max(max_length - 3, 0)]}..."


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON objects.

    Extra fields passed through :func:`log_with_context` are merged into the top level
    of the object, next to the correlation ID when one is bound.
    """

    def format(self, record: LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        correlation_id = get_correlation_id()
        if correlation_id:
            entry["correlation_id"] = correlation_id
        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            entry.update(extra_fields)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return to_json(entry)


class CorrelationIDFilter(logging.Filter):
    """Copy the bound correlation ID onto each record as ``correlation_id``."""

    def filter(self, record: LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id:
            record.correlation_id = correlation_id  # type: ignore[attr-defined]
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger in the ``sqlbulk`` namespace.

    Args:
        name: Dotted name below ``sqlbulk``, e.g. ``"builder"``. Names that already
            start with ``sqlbulk`` are used as given. ``None`` returns the root logger
            of the namespace.

    Returns:
        The logger, with a :class:`CorrelationIDFilter` attached once.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIDFilter) for f in logger.filters):
        logger.addFilter(CorrelationIDFilter())
    return logger


def configure_logging(
    level: str = "INFO", format_style: str = "structured", extra_handlers: list[logging.Handler] | None = None
) -> None:
    """Install a stdout handler on the ``sqlbulk`` root logger.

    Existing handlers on the namespace root are replaced and records stop propagating
    to the process root logger.

    Args:
        level: Level name such as ``"DEBUG"``; case-insensitive.
        format_style: ``"structured"`` for JSON lines, anything else for plain text.
        extra_handlers: Further handlers to attach as given.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, level.upper()))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if format_style == "structured":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root.addHandler(handler)
    for extra in extra_handlers or ():
        root.addHandler(extra)
    root.propagate = False

    log_with_context(
        root,
        logging.DEBUG,
        "sqlbulk logging configured",
        level=level,
        format_style=format_style,
        handlers=len(root.handlers),
    )


def log_with_context(logger: logging.Logger, level: int, message: str, **extra_fields: Any) -> None:
    """Log ``message`` with structured fields, skipping the work when ``level`` is disabled.

    The fields are stored on the record as ``extra_fields`` and emitted by
    :class:`StructuredFormatter`.
    """
    if not logger.isEnabledFor(level):
        return
    logger.log(level, message, extra={"extra_fields": extra_fields})
