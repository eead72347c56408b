"""JSON log output.

Log aggregation filters on the top-level keys, so a renamed or dropped
context field breaks dashboards without any error.
"""

from __future__ import annotations

import json
import logging
import sys

from learnboard.core.logging import _ContainerFormatter, _JsonFormatter


def _record(msg: str = "test message", args: tuple = (), **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="learnboard.services.dashboard_service",
        level=logging.INFO,
        pathname="dashboard_service.py",
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_produces_valid_json() -> None:
    parsed = json.loads(_JsonFormatter().format(_record("Hello %s", ("world",))))
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "learnboard.services.dashboard_service"
    assert parsed["message"] == "Hello world"
    assert "timestamp" in parsed


def test_json_formatter_includes_request_fields() -> None:
    record = _record(
        request_id="abc-123",
        method="GET",
        path="/dashboard/stats",
        status_code=200,
        duration_ms=12.5,
    )
    parsed = json.loads(_JsonFormatter().format(record))
    assert parsed["request_id"] == "abc-123"
    assert parsed["method"] == "GET"
    assert parsed["path"] == "/dashboard/stats"
    assert parsed["status_code"] == 200
    assert parsed["duration_ms"] == 12.5


def test_json_formatter_includes_fallback_fields() -> None:
    parsed = json.loads(
        _JsonFormatter().format(_record(student_id=7, fallback_reason="empty"))
    )
    assert parsed["student_id"] == 7
    assert parsed["fallback_reason"] == "empty"


def test_json_formatter_omits_absent_fields() -> None:
    parsed = json.loads(_JsonFormatter().format(_record(fallback_reason=None)))
    assert "fallback_reason" not in parsed
    assert "student_id" not in parsed


def test_json_formatter_includes_exception_info() -> None:
    formatter = _JsonFormatter()
    try:
        raise ConnectionError("progress store unavailable")
    except ConnectionError:
        record = _record("Dashboard query failed")
        record.exc_info = sys.exc_info()
        output = formatter.format(record)

    parsed = json.loads(output)
    assert "ConnectionError: progress store unavailable" in parsed["exception"]


def test_container_formatter_is_plain_text() -> None:
    output = _ContainerFormatter().format(_record("server started"))
    assert "INFO" in output
    assert "learnboard.services.dashboard_service" in output
    assert "server started" in output
    assert not output.lstrip().startswith("{")
