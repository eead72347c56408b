"""Per-student progress listing and course recommendations.

Unlike the dashboard endpoints these never substitute placeholder data:
an unknown student simply has no progress and every catalog course is a
recommendation.
"""

from __future__ import annotations

from fastapi import APIRouter

from learnboard.api.dependencies import (
    CourseRepoDep,
    ProgressRepoDep,
    RequiredUserIdDep,
    StudentIdDep,
)
from learnboard.api.schemas import (
    CourseOut,
    RecommendationsResponse,
    StudentProgressOut,
    StudentProgressResponse,
)
from learnboard.services import dashboard_service

router = APIRouter(tags=["student"])


@router.get("/student/progress", response_model=StudentProgressResponse)
async def student_progress(
    progress_repo: ProgressRepoDep,
    user_id: RequiredUserIdDep,
) -> StudentProgressResponse:
    summary = await dashboard_service.get_student_progress(user_id, progress_repo)
    return StudentProgressResponse(data=StudentProgressOut.model_validate(summary))


@router.get("/recommendations", response_model=RecommendationsResponse)
async def recommendations(
    student_id: StudentIdDep,
    progress_repo: ProgressRepoDep,
    course_repo: CourseRepoDep,
) -> RecommendationsResponse:
    courses = await dashboard_service.get_recommendations(
        student_id, progress_repo, course_repo
    )
    return RecommendationsResponse(data=[CourseOut.model_validate(c) for c in courses])
