"""Album Catalog Logging - root handler setup and the JSON line format.

Invariants:
    - Every JSON line carries timestamp, level, logger and message
    - Album extras (album_id, operation, error_code, path, rows) appear only when set
    - At most one catalog handler is attached to the root logger

Design Decisions:
    - The installed handler is remembered at module level and swapped on re-setup,
      so repeated lifespans (tests, reloads) leave foreign handlers alone
"""

import json
import logging
from datetime import datetime, timezone

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
ALBUM_LOG_FIELDS = ("album_id", "operation", "error_code", "path", "rows")

_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (field, record.__dict__[field])
            for field in ALBUM_LOG_FIELDS
            if record.__dict__.get(field) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _build_formatter(fmt: str) -> logging.Formatter:
    if fmt == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the catalog's stream handler on the root logger."""
    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(_build_formatter(fmt))
    root.addHandler(_handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return _handler
