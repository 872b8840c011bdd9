"""Log setup: readable console output plus a rotating JSON event log.

Each JSON line carries the habit/todo/user a message is about as top-level
keys, so the file can be filtered per user or per habit without parsing
messages. Inside a request the acting user and route are attached
automatically.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import traceback
from datetime import datetime
from pathlib import Path

from flask import has_request_context, request

from .blueprints.common import USER_HEADER
from .config import BaseConfig

ROOT_LOGGER_NAME = "habitflow"
LOG_FILE_NAME = "habitflow.log"

# Keys promoted to the top level of every JSON line when present.
CONTEXT_FIELDS = ("user_id", "habit_id", "todo_id", "route")

_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


class RequestContextFilter(logging.Filter):
    """Stamp records emitted during a request with its user and route."""

    def filter(self, record: logging.LogRecord) -> bool:
        if has_request_context():
            if getattr(record, "user_id", None) is None:
                record.user_id = request.headers.get(USER_HEADER) or None
            if getattr(record, "route", None) is None:
                record.route = f"{request.method} {request.path}"
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "ts": datetime.fromtimestamp(record.created).astimezone().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        data = {}
        for key, value in vars(record).items():
            if key in _RECORD_ATTRS:
                continue
            if key in CONTEXT_FIELDS:
                if value is not None:
                    entry[key] = value
            else:
                data[key] = value
        if data:
            entry["data"] = data

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            entry["error"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "traceback": "".join(traceback.format_exception(exc_type, exc, tb)),
            }

        return json.dumps(entry, default=str)


def _console_handler(dev_mode: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.set_name("habitflow-console")
    handler.setLevel(logging.INFO if dev_mode else logging.WARNING)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s", datefmt="%H:%M:%S")
    )
    return handler


def _event_log_handler(path: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    handler.set_name("habitflow-events")
    handler.setLevel(logging.INFO)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach the console and event-log handlers to the ``habitflow`` logger.

    Calling it again replaces the handlers instead of stacking duplicates.
    """

    log_dir = Path(config.DATA_DIR) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILE_NAME

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if config.DEV_MODE else logging.INFO)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(_console_handler(config.DEV_MODE))
    logger.addHandler(_event_log_handler(log_path))

    logger.info(
        "Logging ready",
        extra={
            "log_file": str(log_path),
            "rollover_at": f"{config.ROLLOVER_HOUR:02d}:{config.ROLLOVER_MINUTE:02d}",
            "scheduler": config.SCHEDULER_ENABLED,
        },
    )
    return logger


__all__ = ["JSONFormatter", "RequestContextFilter", "setup_logging"]
