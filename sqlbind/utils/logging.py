"""Logging helpers for sqlbind.

Every logger lives under the ``sqlbind`` namespace. The library never
installs handlers on import; applications call :func:`configure_logging` or
wire the ``sqlbind`` logger into their own setup.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

from sqlbind._serialization import encode_json

if TYPE_CHECKING:
    from collections.abc import Iterable
    from logging import LogRecord

__all__ = ("ROOT_LOGGER_NAME", "StructuredFormatter", "configure_logging", "get_logger", "log_with_context")

ROOT_LOGGER_NAME = "sqlbind"

_SIMPLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StructuredFormatter(logging.Formatter):
    """Formats records as one JSON object per line.

    Fields passed through :func:`log_with_context` are merged into the object.
    """

    def format(self, record: LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "extra_fields", None) or {})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return encode_json(entry)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``sqlbind.<name>``, or the ``sqlbind`` logger itself when ``name`` is omitted."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: str = "INFO",
    format_style: str = "structured",
    extra_handlers: Iterable[logging.Handler] | None = None,
) -> None:
    """Send sqlbind's log records to stdout.

    Replaces any handlers previously installed on the ``sqlbind`` logger and
    stops propagation to the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format_style: ``"structured"`` for JSON lines, anything else for plain text.
        extra_handlers: Additional handlers to attach as they are.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        StructuredFormatter() if format_style == "structured" else logging.Formatter(_SIMPLE_FORMAT)
    )
    root_logger.addHandler(console_handler)
    for handler in extra_handlers or ():
        root_logger.addHandler(handler)
    root_logger.propagate = False


def log_with_context(logger: logging.Logger, level: int, message: str, **extra_fields: Any) -> None:
    """Log ``message`` with ``extra_fields`` attached for :class:`StructuredFormatter`."""
    if not logger.isEnabledFor(level):
        return
    logger.log(level, message, extra={"extra_fields": extra_fields}, stacklevel=2)
