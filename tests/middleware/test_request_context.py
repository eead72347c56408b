"""Request ID propagation and the per-request summary line."""

from __future__ import annotations

import logging
import uuid

import pytest
from fastapi.testclient import TestClient

from learnboard.middleware.request_context import _RequestContextFilter, request_id_var

_LOGGER = "learnboard.middleware.request_context"


def test_request_id_generated_when_not_provided(client: TestClient) -> None:
    resp = client.get("/health")
    req_id = resp.headers.get("x-request-id")
    assert req_id is not None
    uuid.UUID(req_id)


def test_request_id_echoed_when_provided(client: TestClient) -> None:
    resp = client.get("/dashboard/stats", headers={"X-Request-ID": "front-end-42"})
    assert resp.headers.get("x-request-id") == "front-end-42"


def test_request_id_present_on_error_responses(client: TestClient) -> None:
    resp = client.post("/courses/details", json={"courseIds": []})
    assert resp.status_code == 400
    assert resp.headers.get("x-request-id") is not None


def test_request_id_var_is_reset_after_request(client: TestClient) -> None:
    client.get("/health", headers={"X-Request-ID": "short-lived"})
    assert request_id_var.get() == "-"


def test_filter_stamps_current_request_id() -> None:
    record = logging.LogRecord("x", logging.INFO, "x.py", 1, "msg", (), None)
    token = request_id_var.set("req-7")
    try:
        assert _RequestContextFilter().filter(record) is True
    finally:
        request_id_var.reset(token)
    assert record.request_id == "req-7"  # type: ignore[attr-defined]


def test_summary_line_logged_per_request(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO, logger=_LOGGER):
        client.get("/health")
    lines = [r for r in caplog.records if r.name == _LOGGER]
    assert len(lines) == 1
    assert "GET /health" in lines[0].getMessage()
    assert lines[0].status_code == 200  # type: ignore[attr-defined]
    assert lines[0].fallback_reason is None  # type: ignore[attr-defined]


def test_summary_line_carries_fallback_reason(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO, logger=_LOGGER):
        client.get("/dashboard/stats", params={"userId": 555})
    (line,) = [r for r in caplog.records if r.name == _LOGGER]
    assert "fallback=empty" in line.getMessage()
    assert line.fallback_reason == "empty"  # type: ignore[attr-defined]
