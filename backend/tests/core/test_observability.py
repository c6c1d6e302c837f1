"""Structured logging — JSON formatter output and idempotent setup."""

import json
import logging

from lotr_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "lotr_api.test", logging.WARNING, __file__, 1, "Review %s missing", (7,), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    payload = json.loads(JSONFormatter().format(_record()))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "lotr_api.test"
    assert payload["message"] == "Review 7 missing"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras_only():
    record = _record(error_code="NOT_FOUND", review_id=7, secret="x")
    payload = json.loads(JSONFormatter().format(record))

    assert payload["error_code"] == "NOT_FOUND"
    assert payload["review_id"] == 7
    assert "secret" not in payload


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", "json")
    setup_logging("DEBUG", "text")

    named = [h for h in logging.root.handlers if h.get_name() == "lotr_api"]
    assert len(named) == 1
    assert not isinstance(named[0].formatter, JSONFormatter)
    assert logging.root.level == logging.DEBUG

    logging.root.removeHandler(named[0])
    logging.root.setLevel(logging.WARNING)
