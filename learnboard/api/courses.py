"""Course catalog endpoints.

POST /courses/details  — batch lookup by courseIds (placeholder fallback)
GET  /courses/total    — catalog size, featured courses, student activity
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response

from learnboard.api.dashboard import mark_fallback
from learnboard.api.dependencies import (
    CourseRepoDep,
    OptionalUserIdDep,
    ProgressRepoDep,
    SettingsDep,
)
from learnboard.api.schemas import (
    CourseDetailsIn,
    CourseDetailsResponse,
    CourseOut,
    CourseOverviewOut,
    CourseOverviewResponse,
)
from learnboard.services import dashboard_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.post("/details", response_model=CourseDetailsResponse)
async def course_details(
    body: CourseDetailsIn,
    response: Response,
    course_repo: CourseRepoDep,
    settings: SettingsDep,
) -> CourseDetailsResponse:
    # userId is accepted for parity with the other dashboard calls but the
    # catalog is the same for everyone.
    logger.debug("Course details for user=%s", body.user_id or settings.default_student_id)

    served = await dashboard_service.get_course_details(
        body.course_ids,
        course_repo,
        degrade=settings.degrade_gracefully,
    )
    mark_fallback(response, served)
    return CourseDetailsResponse(
        total=len(served.data),
        courses=[CourseOut.model_validate(c) for c in served.data],
    )


@router.get("/total", response_model=CourseOverviewResponse)
async def course_total(
    progress_repo: ProgressRepoDep,
    course_repo: CourseRepoDep,
    user_id: OptionalUserIdDep,
) -> CourseOverviewResponse:
    overview = await dashboard_service.get_course_overview(
        user_id, progress_repo, course_repo
    )
    return CourseOverviewResponse(data=CourseOverviewOut.model_validate(overview))
