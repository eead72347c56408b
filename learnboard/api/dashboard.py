"""Dashboard statistics endpoints.

GET /dashboard/stats         — totals from the store's grouped aggregate
GET /dashboard/stats/simple  — the same numbers from a plain loop over records

Both answer 200 even when the store is empty or failing (placeholder data,
flagged with an X-Fallback-Reason header) unless FALLBACK_MODE=strict.
"""

from __future__ import annotations

from fastapi import APIRouter, Response

from learnboard.api.dependencies import (
    CourseRepoDep,
    ProgressRepoDep,
    SettingsDep,
    StudentIdDep,
)
from learnboard.api.schemas import DashboardStatsOut, DashboardStatsResponse
from learnboard.models.dashboard import DashboardStats
from learnboard.services import dashboard_service
from learnboard.services.dashboard_service import Served

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

FALLBACK_HEADER = "X-Fallback-Reason"


def mark_fallback(response: Response, served: Served) -> None:
    if served.fallback is not None:
        response.headers[FALLBACK_HEADER] = served.fallback.value


def _stats_response(
    response: Response, served: Served[DashboardStats]
) -> DashboardStatsResponse:
    mark_fallback(response, served)
    return DashboardStatsResponse(data=DashboardStatsOut.model_validate(served.data))


@router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    response: Response,
    student_id: StudentIdDep,
    progress_repo: ProgressRepoDep,
    course_repo: CourseRepoDep,
    settings: SettingsDep,
) -> DashboardStatsResponse:
    served = await dashboard_service.get_dashboard_stats(
        student_id,
        progress_repo,
        course_repo,
        degrade=settings.degrade_gracefully,
    )
    return _stats_response(response, served)


@router.get("/stats/simple", response_model=DashboardStatsResponse)
async def dashboard_stats_simple(
    response: Response,
    student_id: StudentIdDep,
    progress_repo: ProgressRepoDep,
    course_repo: CourseRepoDep,
    settings: SettingsDep,
) -> DashboardStatsResponse:
    served = await dashboard_service.get_dashboard_stats_simple(
        student_id,
        progress_repo,
        course_repo,
        degrade=settings.degrade_gracefully,
    )
    return _stats_response(response, served)
