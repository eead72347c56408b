from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from learnboard.api.analytics import router as analytics_router
from learnboard.api.courses import router as courses_router
from learnboard.api.dashboard import FALLBACK_HEADER
from learnboard.api.dashboard import router as dashboard_router
from learnboard.api.dependencies import course_repo, progress_repo
from learnboard.api.errors import install_error_handlers
from learnboard.api.health import router as health_router
from learnboard.api.metrics_endpoint import router as metrics_router
from learnboard.api.student import router as student_router
from learnboard.core.config import SETTINGS
from learnboard.core.logging import setup_logging
from learnboard.db.engine import engine, lifespan_db
from learnboard.middleware.metrics import MetricsMiddleware
from learnboard.middleware.request_context import (
    RequestContextMiddleware,
    install_request_context_filter,
)
from learnboard.services.seed import seed_demo_data

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
install_request_context_filter()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    async with lifespan_db():
        if SETTINGS.seed_demo_data and engine is None:
            await seed_demo_data(progress_repo, course_repo)
        yield


app = FastAPI(
    title="learnboard",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SETTINGS.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", FALLBACK_HEADER],
)

# Middleware execution order: last-added runs first (outermost layer).
# RequestContext (outermost) → Metrics → CORS → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

install_error_handlers(app)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(dashboard_router)
app.include_router(courses_router)
app.include_router(analytics_router)
app.include_router(student_router)

logger.info(
    "learnboard started  env=%s log_level=%s port=%d fallback_mode=%s store=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    SETTINGS.fallback_mode,
    "postgres" if engine is not None else "in-memory",
)
