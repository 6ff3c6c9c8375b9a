"""
Logging setup for the bill split service.

Whether logging is on, its level and its format all come from ``Settings``
and are applied once when the application is built.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from billsplit.core.config import Settings

ROOT_LOGGER = "billsplit"

_RESERVED = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
}


class StructuredFormatter(logging.Formatter):
    """Formats records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RESERVED:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Configure the package logger from settings.

    Args:
        settings: Application settings; ``LOG_ENABLED``, ``LOG_LEVEL`` and
            ``LOG_STRUCTURED`` are read.

    Returns:
        The configured ``billsplit`` logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)

    # Rebuilding the app (tests do) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if not settings.LOG_ENABLED:
        logger.addHandler(logging.NullHandler())
        logger.disabled = True
        logger.propagate = False
        return logger

    logger.disabled = False
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    if settings.LOG_STRUCTURED:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    logger.addHandler(handler)
    logger.propagate = False

    return logger
