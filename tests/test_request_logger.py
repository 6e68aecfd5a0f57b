"""Tests for request-scoped structured logging."""

import json
import logging

from recipe_ingest.observability import JsonLogFormatter, RequestLogger


def _record(caplog):
    assert caplog.records
    return caplog.records[-1]


class TestRequestLogger:
    def test_context_on_records(self, caplog):
        log = RequestLogger(logging.getLogger("test.request"), request_id="r1", url="https://x", user_id="u1")

        with caplog.at_level(logging.INFO, logger="test.request"):
            log.bind(component="main").info("Processing recipe request", fields={"attempt": 1})

        record = _record(caplog)
        assert record.getMessage() == "Processing recipe request"
        assert record.component == "main"
        assert record.request_id == "r1"
        assert record.user_id == "u1"
        assert record.fields == {"attempt": 1}

    def test_none_context_dropped(self):
        log = RequestLogger(logging.getLogger("test.request"), url=None, user_id="u1")
        assert log.extra == {"user_id": "u1"}

    def test_bind_keeps_start_time(self):
        log = RequestLogger(logging.getLogger("test.request"), start_time=100.0)
        bound = log.bind(component="executor")
        assert bound.start_time == 100.0
        assert bound.extra == {"component": "executor"}

    def test_with_duration(self, caplog):
        log = RequestLogger(logging.getLogger("test.request"), component="main")

        with caplog.at_level(logging.INFO, logger="test.request"):
            log.with_duration("done", fields={"recipe_id": "rec-1"})

        record = _record(caplog)
        assert record.fields["recipe_id"] == "rec-1"
        assert isinstance(record.fields["duration_ms"], int)
        assert record.fields["duration_ms"] >= 0


class TestJsonLogFormatter:
    def test_format(self):
        record = logging.LogRecord("recipe_ingest.processing", logging.ERROR, __file__, 1, "Error fetching recipe", None, None)
        record.component = "main"
        record.url = "https://x"
        record.fields = {"error": "boom"}

        entry = json.loads(JsonLogFormatter().format(record))

        assert entry["level"] == "error"
        assert entry["msg"] == "Error fetching recipe"
        assert entry["component"] == "main"
        assert entry["url"] == "https://x"
        assert entry["fields"] == {"error": "boom"}
        assert entry["ts"].endswith("Z")
        assert "user_id" not in entry
