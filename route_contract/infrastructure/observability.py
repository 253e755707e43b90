"""Structured Logging — JSON formatter and setup for the adapter's diagnostic channel.

Invariants:
    - All records include timestamp, level, logger name, and message
    - Contract extras (route, hook, event_count, error_type) surfaced when present
    - Forwarded log events (logging_sink) carry their tags/metadata and the
      event severity (debug=0, info=1, error=2, warn=3) as event_severity
    - setup_logging is idempotent: a repeated app lifespan replaces its own
      handler instead of stacking another one

Design Decisions:
    - Stdlib logging + a small JSONFormatter; the host app may install its own handlers instead
    - setup_logging called on startup via the app lifespan
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "route", "hook", "event_count", "error_type",
    "tags", "metadata", "event_severity",
)

_HANDLER_NAME = "route_contract"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging; returns the installed handler."""
    for existing in logging.root.handlers[:]:
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
