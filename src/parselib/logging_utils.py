"""Structured logging helpers."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from typing import Any

from .config import LoggingConfig

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED = set(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {"message", "asctime"}


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the fields a caller attached to ``record`` via ``extra``."""

    return {key: value for key, value in vars(record).items() if key not in _RESERVED}


class JsonFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        payload.update(record_context(record))
        if record.exc_info:
            # Include stack traces when provided.
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextFormatter(logging.Formatter):
    """Human-readable format with ``key=value`` context appended."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = record_context(record)
        if context:
            text += " " + " ".join(f"{key}={value}" for key, value in context.items())
        return text


def configure_logging(config: LoggingConfig) -> None:
    """Configure root logger."""

    level = getattr(logging, config.level.upper(), logging.INFO)
    handlers: list[logging.Handler] = []
    if config.log_file:
        handlers.append(
            RotatingFileHandler(
                config.log_file,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
            )
        )
    else:
        # Default to stderr so stdout stays free for command output.
        handlers.append(logging.StreamHandler())

    formatter: logging.Formatter
    if config.json_output:
        formatter = JsonFormatter()
    else:
        formatter = ContextFormatter("%(levelname)s %(name)s %(message)s")

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
