"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (device_id, error_code, path, operation) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - setup_logging called once on startup via lifespan
    - Plaintext passwords are never passed to a logger call
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = ("device_id", "error_code", "path", "operation", "reading_id")
_HANDLER_MARK = "_sensorhub_handler"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application.

    Idempotent: a handler installed by an earlier call is replaced, handlers
    installed by anything else (uvicorn, pytest) are left alone.
    """
    for existing in list(logging.root.handlers):
        if getattr(existing, _HANDLER_MARK, False):
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    setattr(handler, _HANDLER_MARK, True)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
