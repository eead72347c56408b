"""Progress trend endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Response

from learnboard.api.dashboard import mark_fallback
from learnboard.api.dependencies import (
    CourseRepoDep,
    ProgressRepoDep,
    SettingsDep,
    StudentIdDep,
)
from learnboard.api.schemas import TrendPointOut, TrendResponse
from learnboard.services import dashboard_service

router = APIRouter(prefix="/analytics", tags=["analytics"])

DEFAULT_TREND_DAYS = 30
# A year of daily points is already more than the chart can show.
MAX_TREND_DAYS = 366


@router.get("/progress-trend", response_model=TrendResponse)
async def progress_trend(
    response: Response,
    student_id: StudentIdDep,
    progress_repo: ProgressRepoDep,
    course_repo: CourseRepoDep,
    settings: SettingsDep,
    days: Annotated[int, Query(ge=0, le=MAX_TREND_DAYS)] = DEFAULT_TREND_DAYS,
) -> TrendResponse:
    served = await dashboard_service.get_progress_trend(
        student_id,
        days,
        progress_repo,
        course_repo,
        degrade=settings.degrade_gracefully,
        demo_data=settings.trend_demo_data,
    )
    mark_fallback(response, served)
    return TrendResponse(data=[TrendPointOut.model_validate(p) for p in served.data])
