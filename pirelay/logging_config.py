"""Logging setup for the relay.

Configures the root logger once from ``settings.logging``: JSON lines by
default, plain text for local debugging, with an optional log file.
"""
from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone

from .config import LoggingSettings, settings

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def build_logging_config(config: LoggingSettings) -> dict:
    """Translate LoggingSettings into a ``logging.config.dictConfig`` mapping."""
    formatter = "json" if config.format.lower() == "json" else "text"
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": formatter,
        },
    }
    if config.file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": formatter,
            "filename": config.file,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JsonFormatter},
            "text": {"format": TEXT_FORMAT},
        },
        "handlers": handlers,
        "root": {
            "level": config.level.upper(),
            "handlers": list(handlers),
        },
        "loggers": {
            # httpx logs every request at INFO
            "httpx": {"level": "WARNING"},
        },
    }


def setup_logging(config: LoggingSettings | None = None) -> None:
    """Configure application logging."""
    logging.config.dictConfig(build_logging_config(config or settings.logging))
