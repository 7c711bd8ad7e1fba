"""Structured Logging — one JSON object per line, carrying queue/member context.

Invariants:
    - Every line has ts, level, logger, msg; the timestamp is when the record was
      created, not when it was formatted
    - Queue context (queue_id, user_id, order) and request context (path,
      error_code) appear only when the caller passed them via extra=
    - setup_logging is idempotent: calling it twice never duplicates output

Design Decisions:
    - SQLAlchemy engine and uvicorn access logs pinned to WARNING unless the app
      itself runs at DEBUG
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = ("queue_id", "user_id", "order", "path", "error_code")
NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")

_installed: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        line.update(
            (key, record.__dict__[key])
            for key in CONTEXT_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the waitlist handler on the root logger, replacing a previous one."""
    global _installed

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        ))

    root = logging.getLogger()
    if _installed is not None:
        root.removeHandler(_installed)
    root.addHandler(handler)
    _installed = handler

    root_level = logging.getLevelName(level.upper())
    if not isinstance(root_level, int):
        root_level = logging.INFO
    root.setLevel(root_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING,
        )
    return handler
