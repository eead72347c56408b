"""Prometheus scrape endpoint (text exposition format, not JSON).

Watch `dashboard_fallback_total{reason="error"}` here: it is the only
signal that the progress store is failing, because the dashboard
endpoints keep answering 200 with placeholder data.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
