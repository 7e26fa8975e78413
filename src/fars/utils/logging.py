"""Centralized logging setup and JSON formatter for structured logging."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Union

# Attributes every LogRecord carries; anything else came in via ``extra=``.
_RESERVED_ATTRS = {
    "msg", "args", "levelname", "levelno", "pathname", "filename",
    "module", "exc_info", "exc_text", "stack_info", "lineno",
    "funcName", "created", "msecs", "relativeCreated", "thread",
    "threadName", "processName", "process", "name", "message",
    "taskName",
}

_PLAIN_FORMAT = "%(levelname)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects.

    Merges any `extra=` kwargs directly into the payload, so a warning
    such as ``invalid year`` carries its ``year`` and ``reason`` fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for key, value in getattr(record, "__dict__", {}).items():
            if key not in _RESERVED_ATTRS:
                payload[key] = value

        # safe fallback for non-serializable objects
        return json.dumps(payload, default=str)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
) -> logging.Logger:
    """Attach a single stream handler to the ``fars`` package logger.

    Calling this repeatedly replaces the previously installed handler
    instead of stacking duplicates.

    Args:
        level: Logging level name or number (default ``INFO`` so the
            "no accidents to plot" message is visible).
        json_format: When ``True`` use :class:`JsonFormatter`, otherwise a
            plain ``LEVEL: message`` layout.

    Returns:
        The configured ``fars`` logger.
    """
    logger = logging.getLogger("fars")
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_fars_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if json_format else logging.Formatter(_PLAIN_FORMAT))
    handler._fars_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
