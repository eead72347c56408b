"""Liveness, readiness and the root banner.

/health answers "is the process alive" and reports which store backs the
dashboard.  It stays 200 when the database is down: the dashboard keeps
serving placeholder data in that case, so the process is still useful.

/ready answers "should the load balancer send traffic here".  Without a
database the in-memory stores are always ready; with one, readiness
requires a successful round-trip.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from learnboard.db import engine as db_engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


async def _database_status() -> str:
    if db_engine.engine is None:
        return "not_configured"
    try:
        async with db_engine.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return "ok"
    except Exception:
        logger.warning("Database health check failed", exc_info=True)
        return "degraded"


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "Hello, The Backend is Up and Running"


@router.get("/health")
async def health() -> dict:
    database = await _database_status()
    return {
        "status": "ok" if database != "degraded" else "degraded",
        "checks": {"database": database},
    }


@router.get("/ready")
async def ready() -> Response:
    if await _database_status() == "degraded":
        return Response(status_code=503)
    return Response(status_code=200)
