"""Request IDs and a one-line summary per request.

The request ID is read from X-Request-ID (so a front-end or gateway can
correlate) or generated, stored in a ContextVar, stamped onto every log
record by _RequestContextFilter, and echoed back in the response header.

A ContextVar rather than a thread-local: requests interleave on one
event-loop thread, and each asyncio task gets its own copy of the var.

The summary line also carries X-Fallback-Reason when the handler served
placeholder data, so degraded dashboard responses can be found in logs
without cross-referencing metrics.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class _RequestContextFilter(logging.Filter):
    """Copies the current request ID onto every LogRecord."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("-")  # type: ignore[attr-defined]
        return True


def install_request_context_filter() -> None:
    """Attach the filter to the root handlers, once.

    Logger-level filters don't apply to records propagated from child
    loggers, so the filter goes on the handlers setup_logging installed.
    """
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, _RequestContextFilter) for f in handler.filters):
            handler.addFilter(_RequestContextFilter())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns a request ID, times the request and logs its completion."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        req_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        token = request_id_var.set(req_id)

        start = time.monotonic()
        try:
            response = await call_next(request)
            duration_ms = round((time.monotonic() - start) * 1000, 1)

            fallback = response.headers.get("x-fallback-reason")
            logger.info(
                "%s %s → %d (%.1fms)%s",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                f" fallback={fallback}" if fallback else "",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                    "fallback_reason": fallback,
                },
            )

            response.headers["X-Request-ID"] = req_id
            return response
        finally:
            request_id_var.reset(token)
