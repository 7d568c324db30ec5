"""Logging setup: a readable console stream plus a rotating JSON log.

Every record carries ``user_id``, the account the current command acts as,
so one log file can be filtered per user.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from .config import BaseConfig

ANONYMOUS = "-"
LOG_FILENAME = "habitflow.log"


class UserContextFilter(logging.Filter):
    """Stamp records with the acting user unless the call site passed one."""

    def __init__(self, user_id: str = ANONYMOUS) -> None:
        super().__init__()
        self.user_id = user_id

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "user_id", None):
            record.user_id = self.user_id
        return True


_user_context = UserContextFilter()


class JSONFormatter(logging.Formatter):
    """One JSON object per line; unknown record attributes go under ``extra``."""

    _STANDARD_ATTRS = {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
        "processName", "relativeCreated", "thread", "threadName", "exc_info",
        "exc_text", "stack_info", "getMessage", "stack_trace", "taskName",
        "user_id",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "user_id": getattr(record, "user_id", ANONYMOUS),
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
            if key not in self._STANDARD_ATTRS
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        return json.dumps(log_data, default=str)


def bind_user(user_id: str) -> None:
    """Attribute subsequent log records to ``user_id``."""

    _user_context.user_id = user_id or ANONYMOUS


def setup_logging(config: BaseConfig, *, user_id: str = ANONYMOUS) -> logging.Logger:
    """Attach console and rotating JSON file handlers to the ``habitflow`` logger.

    Calling it again replaces the handlers, so repeated CLI invocations in one
    process do not duplicate output.
    """
    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    bind_user(user_id)

    root_logger = logging.getLogger("habitflow")
    root_logger.setLevel(logging.INFO)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if config.DEV_MODE else logging.WARNING)

    if config.DEV_MODE:
        console_format = "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] @%(user_id)s %(message)s"
    else:
        console_format = "%(asctime)s [%(levelname)s] %(name)s @%(user_id)s: %(message)s"

    console_handler.setFormatter(
        logging.Formatter(
            fmt=console_format,
            datefmt="%H:%M:%S" if config.DEV_MODE else "%Y-%m-%d %H:%M:%S",
        )
    )
    # Handler-level so records from child loggers are stamped too.
    console_handler.addFilter(_user_context)
    root_logger.addHandler(console_handler)

    log_file = logs_dir / LOG_FILENAME
    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(JSONFormatter())
    file_handler.addFilter(_user_context)
    root_logger.addHandler(file_handler)

    root_logger.info(
        "Logging initialized",
        extra={
            "dev_mode": config.DEV_MODE,
            "log_file": str(log_file),
            "data_dir": config.DATA_DIR,
        },
    )

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``habitflow.<name>`` logger."""
    return logging.getLogger(f"habitflow.{name}")
