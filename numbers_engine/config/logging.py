"""Structured logging configuration.

Provides JSON-formatted logs with optional request_id correlation. structlog is
configured to render JSON through the stdlib logging tree so that library modules
using ``logging.getLogger(__name__)`` and HTTP code using ``structlog.get_logger``
end up on the same handler.
"""
from __future__ import annotations

import json
import logging as _logging
import sys
import time
from typing import Any, Dict, Optional

import structlog

from .settings import get_settings


class JsonFormatter(_logging.Formatter):
    def format(self, record) -> str:  # noqa: D401 - record is LogRecord
        message = record.getMessage()
        base: Dict[str, Any] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
        }
        # Optional contextual attributes
        for attr in ("request_id", "method", "path"):
            if hasattr(record, attr):
                base[attr] = getattr(record, attr)
        # structlog events arrive pre-rendered as a JSON object
        if message.startswith("{"):
            try:
                event = json.loads(message)
            except ValueError:
                event = None
            if isinstance(event, dict):
                base["message"] = event.pop("event", message)
                event.pop("level", None)
                event.pop("timestamp", None)
                base.update(event)
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for application startup."""
    level = (level or get_settings().LOG_LEVEL).upper()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = _logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    root = _logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def bind_context(**kwargs: Any) -> None:
    """Bind contextual attributes (e.g. request_id) for subsequent structlog calls."""
    structlog.contextvars.clear_contextvars()
    if kwargs:
        structlog.contextvars.bind_contextvars(**kwargs)


__all__ = ["JsonFormatter", "configure_logging", "bind_context"]
