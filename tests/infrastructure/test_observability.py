"""Structured Logging - JSON formatter fields and the TRACE level.

Tests:
    - JSONFormatter emits base fields plus known extras
    - trace() logs at level 5 only when enabled
"""

import json
import logging

from mxbot.infrastructure.observability import TRACE, JSONFormatter, trace


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "mxbot.test", logging.WARNING, __file__, 1, "Unable to write %s", ("session.json",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "mxbot.test"
    assert payload["message"] == "Unable to write session.json"
    assert "timestamp" in payload


def test_json_formatter_extras():
    payload = json.loads(JSONFormatter().format(
        _record(record="session.json", error_code="STATE_WRITE_FAILED", unrelated="x"),
    ))
    assert payload["record"] == "session.json"
    assert payload["error_code"] == "STATE_WRITE_FAILED"
    assert "unrelated" not in payload


def test_trace_level_name():
    assert logging.getLevelName(TRACE) == "TRACE"


def test_trace_respects_level(caplog):
    logger = logging.getLogger("mxbot.test.trace")
    with caplog.at_level(logging.DEBUG):
        trace(logger, "hidden")
    assert "hidden" not in caplog.text
    with caplog.at_level(TRACE):
        trace(logger, "shown %s", "here")
    assert "shown here" in caplog.text
