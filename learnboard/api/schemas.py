"""Response and request schemas.

Domain objects are frozen dataclasses; these Pydantic models only shape
them for the wire.  Field names are snake_case in Python and camelCase in
JSON (the dashboard front-end's contract), built with from_attributes so
a dataclass can be passed straight to model_validate().
"""

from __future__ import annotations

import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Wire(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CourseOut(_Wire):
    course_id: int
    title: str
    description: str
    thumbnail: str
    total_lessons: int


class RecentCourseOut(_Wire):
    course_id: int
    completed_lessons: int
    total_lessons: int
    time_spent: float
    progress: float
    last_accessed: datetime.datetime | None
    title: str
    description: str
    thumbnail: str


class ProgressRecordOut(_Wire):
    student_id: int = Field(alias="userId")
    course_id: int
    completed_lessons: int
    total_lessons: int
    time_spent: float
    progress: float
    last_accessed: datetime.datetime | None
    enrolled_at: datetime.datetime | None


class DashboardStatsOut(_Wire):
    total_courses: int
    total_time_spent: float
    average_progress: float
    completed_courses: int
    in_progress_courses: int
    recent_courses: list[RecentCourseOut]


class TrendCourseOut(_Wire):
    course_id: int
    title: str
    time_spent: float
    lessons_completed: int


class TrendPointOut(_Wire):
    date: datetime.date
    daily_time_spent: float
    daily_lessons_completed: int
    courses: list[TrendCourseOut]


class StudentProgressOut(_Wire):
    total_courses: int
    total_time_spent: float
    average_progress: int
    completed_courses: int
    in_progress_courses: int
    course_progress: list[ProgressRecordOut]


class CourseOverviewOut(_Wire):
    total_courses: int
    user_progress: list[ProgressRecordOut]
    featured_courses: list[CourseOut]
    recent_activity: list[RecentCourseOut]


# --- Envelopes ---


class DashboardStatsResponse(_Wire):
    status: Literal["success"] = "success"
    data: DashboardStatsOut


class TrendResponse(_Wire):
    status: Literal["success"] = "success"
    data: list[TrendPointOut]


class CourseDetailsResponse(_Wire):
    status: Literal["success"] = "success"
    total: int
    courses: list[CourseOut]


class StudentProgressResponse(_Wire):
    status: Literal["success"] = "success"
    data: StudentProgressOut


class CourseOverviewResponse(_Wire):
    status: Literal["success"] = "success"
    data: CourseOverviewOut


class RecommendationsResponse(_Wire):
    status: Literal["success"] = "success"
    data: list[CourseOut]


# --- Requests ---


class CourseDetailsIn(_Wire):
    course_ids: list[int] = Field(min_length=1)
    user_id: int | None = None
