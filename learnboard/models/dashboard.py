"""Derived read models for the dashboard.

Nothing here is persisted.  Each value is computed per request from
progress records and the course catalog and thrown away afterwards.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field

UNKNOWN_COURSE_TITLE = "Unknown Course"


@dataclass(frozen=True, slots=True)
class RecentCourse:
    """A progress record enriched with its catalog entry."""

    course_id: int
    completed_lessons: int
    total_lessons: int
    time_spent: float
    progress: float
    last_accessed: datetime.datetime | None
    title: str = UNKNOWN_COURSE_TITLE
    description: str = ""
    thumbnail: str = ""


@dataclass(frozen=True, slots=True)
class ProgressTotals:
    """Unrounded output of the progress store's grouped aggregate."""

    total_courses: int = 0
    total_time_spent: float = 0.0
    average_progress: float = 0.0
    completed_courses: int = 0
    in_progress_courses: int = 0


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total_courses: int = 0
    total_time_spent: float = 0.0
    average_progress: float = 0.0
    completed_courses: int = 0
    in_progress_courses: int = 0
    recent_courses: tuple[RecentCourse, ...] = field(default_factory=tuple)

    @property
    def not_started_courses(self) -> int:
        return self.total_courses - self.completed_courses - self.in_progress_courses


@dataclass(frozen=True, slots=True)
class TrendCourse:
    course_id: int
    title: str
    time_spent: float
    lessons_completed: int


@dataclass(frozen=True, slots=True)
class TrendPoint:
    """One calendar day of activity inside a trend window."""

    date: datetime.date
    daily_time_spent: float
    daily_lessons_completed: int
    courses: tuple[TrendCourse, ...] = ()
