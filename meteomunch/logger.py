"""Logging setup for meteomunch processes."""
from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict

from .config import LogLevel

LEVELS = {
    LogLevel.DEBUG.value: logging.DEBUG,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.ERROR.value: logging.ERROR,
}

_RECORD_KEYS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON document per record, extra fields included."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RECORD_KEYS or key in payload:
                continue
            payload[key] = value if isinstance(value, (str, int, float, bool, type(None))) else str(value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def level_for(name: str) -> int:
    """Map a configured log level to a :mod:`logging` level; unknown means INFO."""
    return LEVELS.get((name or "").lower(), logging.INFO)


def configure_logging(level: str = LogLevel.INFO.value) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level_for(level), handlers=[handler], force=True)


__all__ = ["JsonFormatter", "LEVELS", "configure_logging", "level_for"]
