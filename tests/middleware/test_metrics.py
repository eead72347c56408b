"""Prometheus metrics middleware and the fallback counter.

prometheus-client keeps one global registry and counters only go up, so
every test asserts on the delta between a before and an after read.
"""

from __future__ import annotations

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from tests.conftest import FailingProgressRepo


def _get_sample(name: str, labels: dict | None = None) -> float:
    value = REGISTRY.get_sample_value(name, labels=labels or {})
    return value if value is not None else 0.0


def _requests(endpoint: str, status_code: str, method: str = "GET") -> float:
    return _get_sample(
        "http_requests_total",
        {"method": method, "endpoint": endpoint, "status_code": status_code},
    )


def test_request_counter_increments(client: TestClient) -> None:
    before = _requests("/health", "200")
    client.get("/health")
    assert _requests("/health", "200") - before == 1


def test_endpoint_label_is_the_route_template(client: TestClient) -> None:
    before = _requests("/dashboard/stats", "200")
    client.get("/dashboard/stats", params={"userId": 3})
    client.get("/dashboard/stats", params={"userId": 4})
    assert _requests("/dashboard/stats", "200") - before == 2


def test_unknown_paths_share_one_label(client: TestClient) -> None:
    before = _requests("unmatched", "404")
    client.get("/wp-admin")
    client.get("/.env")
    assert _requests("unmatched", "404") - before == 2
    assert _requests("/wp-admin", "404") == 0.0


def test_request_duration_histogram_observes(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/health"}
    before = _get_sample("http_request_duration_seconds_count", labels)
    client.get("/health")
    assert _get_sample("http_request_duration_seconds_count", labels) - before == 1


def test_fallback_counter_tracks_placeholder_responses(
    client: TestClient, failing_progress_repo: FailingProgressRepo
) -> None:
    labels = {"endpoint": "dashboard_stats", "reason": "error"}
    before = _get_sample("dashboard_fallback_total", labels)
    client.get("/dashboard/stats")
    assert _get_sample("dashboard_fallback_total", labels) - before == 1


def test_metrics_endpoint_returns_prometheus_format(client: TestClient) -> None:
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert "http_requests_total" in resp.text
    assert "http_request_duration_seconds" in resp.text
    assert "dashboard_fallback_total" in resp.text


def test_metrics_endpoint_not_self_instrumented(client: TestClient) -> None:
    before = _requests("/metrics", "200")
    client.get("/metrics")
    client.get("/metrics")
    assert _requests("/metrics", "200") == before
