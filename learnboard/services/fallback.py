"""Placeholder data served when real progress data is missing or unreachable.

The dashboard front-end was built against a demo dataset of two courses,
and new students (or a failing store) get that dataset instead of an empty
or broken page.  Two triggers lead here:

  EMPTY — the store answered, but had no records for the student
  ERROR — a store call or the aggregation itself raised

ERROR always wins over EMPTY.  Whether either trigger substitutes data at
all is controlled by FALLBACK_MODE: "degrade" serves placeholders with a
200, "strict" returns real (possibly zero) results and lets errors become
500s.

The synthetic trend series is demo data with random values.  It has a
stable shape (one point per day) but nothing in it is real.
"""

from __future__ import annotations

import datetime
import enum
import random
from collections.abc import Iterable

from learnboard.models.course import Course
from learnboard.models.dashboard import (
    DashboardStats,
    RecentCourse,
    TrendCourse,
    TrendPoint,
)
from learnboard.services.aggregation import round1


class FallbackReason(enum.StrEnum):
    EMPTY = "empty"
    ERROR = "error"


PLACEHOLDER_COURSES: tuple[Course, ...] = (
    Course(
        course_id=1,
        title="JavaScript Fundamentals",
        description="Learn basics of JS",
        thumbnail="js.png",
        total_lessons=4,
    ),
    Course(
        course_id=2,
        title="React.js for Beginners",
        description="Learn React from scratch",
        thumbnail="react.png",
        total_lessons=4,
    ),
)

PLACEHOLDER_RECENT_COURSES: tuple[RecentCourse, ...] = (
    RecentCourse(
        course_id=1,
        completed_lessons=2,
        total_lessons=4,
        time_spent=8.5,
        progress=50,
        last_accessed=datetime.datetime(2024, 1, 15, 10, 30, tzinfo=datetime.UTC),
        title="JavaScript Fundamentals",
        description="Learn basics of JS",
        thumbnail="js.png",
    ),
    RecentCourse(
        course_id=2,
        completed_lessons=1,
        total_lessons=4,
        time_spent=5.2,
        progress=25,
        last_accessed=datetime.datetime(2024, 1, 14, 14, 20, tzinfo=datetime.UTC),
        title="React.js for Beginners",
        description="Learn React from scratch",
        thumbnail="react.png",
    ),
)

PLACEHOLDER_STATS = DashboardStats(
    total_courses=2,
    total_time_spent=13.7,
    average_progress=37.5,
    completed_courses=0,
    in_progress_courses=2,
    recent_courses=PLACEHOLDER_RECENT_COURSES,
)

# Inclusive bounds for the synthetic trend values.
DAILY_TIME_RANGE = (1.0, 5.0)
DAILY_LESSONS_RANGE = (1, 3)
COURSE_TIME_RANGE = (0.5, 2.5)
COURSE_LESSONS_RANGE = (1, 2)


def placeholder_courses(course_ids: Iterable[int]) -> list[Course]:
    """Placeholder catalog entries whose id is in course_ids, in catalog order."""
    wanted = set(course_ids)
    return [c for c in PLACEHOLDER_COURSES if c.course_id in wanted]


def synthetic_trend(
    days: int,
    now: datetime.datetime,
    rng: random.Random | None = None,
) -> list[TrendPoint]:
    """Demo trend: one point per day from (today - days) through today.

    Values are drawn uniformly from the *_RANGE bounds and attributed to
    the two placeholder courses.  Pass a seeded rng for reproducible output.
    """
    if days < 0:
        raise ValueError("days must be >= 0")
    rng = rng or random.Random()
    today = now.astimezone(datetime.UTC).date()

    points: list[TrendPoint] = []
    for offset in range(days, -1, -1):
        points.append(
            TrendPoint(
                date=today - datetime.timedelta(days=offset),
                daily_time_spent=round1(rng.uniform(*DAILY_TIME_RANGE)),
                daily_lessons_completed=rng.randint(*DAILY_LESSONS_RANGE),
                courses=tuple(
                    TrendCourse(
                        course_id=course.course_id,
                        title=course.title,
                        time_spent=round1(rng.uniform(*COURSE_TIME_RANGE)),
                        lessons_completed=rng.randint(*COURSE_LESSONS_RANGE),
                    )
                    for course in PLACEHOLDER_COURSES
                ),
            )
        )
    return points
