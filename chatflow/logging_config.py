"""JSON logging for the bot process.

Every record is one JSON line. Dialogue transitions and renders attach a
``context`` dict through ``extra``; its ``conversation_id`` is lifted to a
top-level ``conversation`` field so one chat can be followed with a plain
grep over the log file.
"""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import DEFAULT_LOG_PATH

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("aiogram.event", "aiosqlite")


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        context = getattr(record, "context", None)
        if isinstance(context, dict) and "conversation_id" in context:
            entry["conversation"] = context["conversation_id"]
        if context is not None:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # Names and prompts are user text, often non-ASCII
        return json.dumps(entry, ensure_ascii=False, default=str)


def build_logging_config(log_level: str, log_file: str) -> dict[str, Any]:
    """dictConfig for a rotating JSON file plus JSON on stdout."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": "chatflow.logging_config.JSONFormatter"},
        },
        "handlers": {
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": log_file,
                "maxBytes": 10 * 1024 * 1024,
                "backupCount": 5,
                "formatter": "json",
                "encoding": "utf-8",
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "level": log_level.upper(),
            "handlers": ["file", "console"],
        },
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
    }


def setup_logging(log_level: str | None = None, log_file: str | None = None) -> None:
    """
    Install JSON logging for the bot and the HTTP server.

    Args:
        log_level: Root level name. Falls back to LOG_LEVEL, then INFO.
        log_file: Rotating log file, logs/app.log under the project root by default.
    """
    log_level = log_level or os.getenv("LOG_LEVEL", "INFO")
    log_file = log_file or str(DEFAULT_LOG_PATH)
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(build_logging_config(log_level, log_file))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
