"""Structured Logging — one JSON object per line, carrying ledger fields from `extra=`.

Invariants:
    - Every line has timestamp, level, logger and message
    - Ledger fields (operation, caller, outcome, error_code, sequence, ...) appear
      only when the log call supplied them
    - setup_logging() replaces previously installed root handlers, so calling it
      twice (reload, tests) never duplicates output

Design Decisions:
    - stdlib logging with a custom Formatter: no extra dependency
    - "text" format kept for local runs; anything else means JSON
"""

import json
import logging
from datetime import datetime, timezone

LEDGER_FIELDS = (
    "operation",
    "caller",
    "outcome",
    "error_code",
    "sequence",
    "result_id",
    "entries",
    "path",
)

# Chatty third-party loggers held at WARNING unless the app runs at DEBUG
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (name, getattr(record, name))
            for name in LEDGER_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    if fmt == "text":
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        ))
    else:
        handler.setFormatter(JSONFormatter())
    root.addHandler(handler)

    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    root.setLevel(numeric)
    quiet = numeric if numeric <= logging.DEBUG else max(numeric, logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet)
