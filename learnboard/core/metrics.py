"""Application metrics using the Prometheus client library.

All metrics are defined here so the service has a single inventory of
what it measures.  Other modules import a metric and increment/observe it
at the point of action.

HTTP metrics are populated by MetricsMiddleware.  FALLBACK_RESPONSES is
incremented by the dashboard service every time placeholder data is
served instead of real progress data; a rising `reason="error"` rate
means the progress store is failing while users still see a working
dashboard.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Dashboard metrics
# ---------------------------------------------------------------------------

FALLBACK_RESPONSES = Counter(
    "dashboard_fallback_total",
    "Responses served from placeholder data instead of the progress store",
    ["endpoint", "reason"],  # reason: "empty" or "error"
)
