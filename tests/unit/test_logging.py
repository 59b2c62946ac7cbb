"""Unit tests for log formatting."""

from __future__ import annotations

import json
import logging

from claude_issue_runner.runner.logging import JsonFormatter, record_extra


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="claude_issue_runner.runner.run",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Retry in %sms",
        args=(1000,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record(status_code=429, delay_ms=1000)))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "claude_issue_runner.runner.run"
    assert payload["message"] == "Retry in 1000ms"
    assert payload["extra"] == {"status_code": 429, "delay_ms": 1000}


def test_record_extra_ignores_standard_attributes() -> None:
    assert record_extra(_record()) == {}
