"""Structured logging for reminders, habits and the background ticker.

Console output is human readable; the rotating file holds one JSON object per
line. Reminder and habit names, fired batches and tick numbers are written as
top-level JSON keys so a log of the ticker can be filtered per reminder.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from .config import BaseConfig

LOG_FILENAME = "studymate.log"
LOGGER_NAME = "studymate"

# Library loggers whose warnings belong in the same file (missed or skipped ticks)
LIBRARY_LOGGERS = ("apscheduler",)

# Fields passed via ``extra=`` that are promoted to top-level JSON keys
DOMAIN_FIELDS = ("tick", "reminder", "habit", "fired", "result", "streak", "remind_at")

_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS
        }
        for field in DOMAIN_FIELDS:
            if field in extra_fields:
                log_data[field] = extra_fields.pop(field)
        if extra_fields:
            log_data["extra"] = extra_fields

        return json.dumps(log_data, default=str)


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Configure console + rotating JSON file logging.

    Warnings from the scheduling library (misfired or skipped ticks) are
    routed into the same JSON file.

    Args:
        config: Application configuration with DATA_DIR and DEV_MODE

    Returns:
        Configured ``studymate`` logger
    """
    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(logging.INFO)
    _reset_handlers(app_logger)

    console_handler = logging.StreamHandler()
    if config.DEV_MODE:
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s", datefmt="%H:%M:%S"
            )
        )
    else:
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", "%Y-%m-%d %H:%M:%S")
        )
    app_logger.addHandler(console_handler)

    log_file = logs_dir / LOG_FILENAME
    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(JSONFormatter())
    app_logger.addHandler(file_handler)

    for name in LIBRARY_LOGGERS:
        library_logger = logging.getLogger(name)
        _reset_handlers(library_logger)
        library_logger.setLevel(logging.WARNING)
        library_logger.addHandler(file_handler)

    app_logger.info(
        "Logging initialized",
        extra={
            "dev_mode": config.DEV_MODE,
            "log_file": str(log_file),
            "save_file": str(config.SAVE_FILE),
            "tick_seconds": config.TICK_SECONDS,
        },
    )

    return app_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``studymate`` hierarchy, e.g. ``studymate.reminders``."""

    return logging.getLogger(f"{LOGGER_NAME}.{name}")
