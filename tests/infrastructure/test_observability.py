"""Structured Logging - JSONFormatter output shape."""

import json
import logging

from album_catalog.infrastructure import observability
from album_catalog.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "album_catalog.services.album_store", logging.ERROR, __file__, 1,
        "Storage get failed", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "ERROR"
    assert log["logger"] == "album_catalog.services.album_store"
    assert log["message"] == "Storage get failed"
    assert "timestamp" in log


def test_json_formatter_includes_extras_when_present():
    log = json.loads(JSONFormatter().format(
        _record(album_id="3", operation="get", error_code="STORAGE_FAILURE"),
    ))
    assert log["album_id"] == "3"
    assert log["operation"] == "get"
    assert log["error_code"] == "STORAGE_FAILURE"
    assert "path" not in log


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        import sys
        record = _record()
        record.exc_info = sys.exc_info()
    log = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in log["exception"]


def test_setup_logging_replaces_its_own_handler():
    foreign = logging.NullHandler()
    logging.root.addHandler(foreign)
    try:
        first = setup_logging("DEBUG", "json")
        second = setup_logging("WARNING", "text")

        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert foreign in logging.root.handlers
        assert observability._handler is second
        assert not isinstance(second.formatter, JSONFormatter)
        assert second.formatter._fmt == observability.TEXT_FORMAT
        assert logging.root.level == logging.WARNING
    finally:
        logging.root.removeHandler(foreign)


def test_setup_logging_json_format():
    handler = setup_logging("INFO", "json")
    assert isinstance(handler.formatter, JSONFormatter)
    assert logging.root.level == logging.INFO
