"""Dashboard use cases: fetch from the stores, aggregate, apply fallback.

Each function here corresponds to one endpoint.  The pattern is always
the same two-step fetch-then-merge:

  1. ask the progress store for the student's records (or totals)
  2. ask the course catalog for exactly the course ids those records use
  3. hand both to the pure functions in services/aggregation.py

Fallback handling lives here rather than in the routers so the policy is
testable without HTTP.  With degrade=True an empty result or any
exception turns into placeholder data tagged with a FallbackReason; with
degrade=False empty results stay empty and exceptions propagate.
"""

from __future__ import annotations

import datetime
import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from learnboard.core.metrics import FALLBACK_RESPONSES
from learnboard.models.course import Course
from learnboard.models.dashboard import DashboardStats, RecentCourse, TrendPoint
from learnboard.models.progress import ProgressRecord
from learnboard.repos.course_repo import CourseRepo
from learnboard.repos.progress_repo import ProgressRepo
from learnboard.services.aggregation import (
    RECENT_COURSES_LIMIT,
    compute_dashboard_stats,
    compute_trend,
    recent_courses,
    round1,
    round_whole,
    stats_from_totals,
    summarize,
    window_start,
)
from learnboard.services.fallback import (
    PLACEHOLDER_STATS,
    FallbackReason,
    placeholder_courses,
    synthetic_trend,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

RECENT_ACTIVITY_LIMIT = 5
FEATURED_COURSES_LIMIT = 4
RECOMMENDATIONS_LIMIT = 3


@dataclass(frozen=True, slots=True)
class Served(Generic[T]):
    """A result plus the reason it came from placeholder data, if it did."""

    data: T
    fallback: FallbackReason | None = None


@dataclass(frozen=True, slots=True)
class StudentProgressSummary:
    total_courses: int
    total_time_spent: float
    average_progress: int
    completed_courses: int
    in_progress_courses: int
    course_progress: tuple[ProgressRecord, ...]


@dataclass(frozen=True, slots=True)
class CourseOverview:
    total_courses: int
    featured_courses: tuple[Course, ...]
    user_progress: tuple[ProgressRecord, ...] = ()
    recent_activity: tuple[RecentCourse, ...] = field(default_factory=tuple)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


async def _course_map(
    course_repo: CourseRepo, course_ids: Iterable[int]
) -> dict[int, Course]:
    ids = set(course_ids)
    if not ids:
        return {}
    return {c.course_id: c for c in await course_repo.get_many(ids)}


def _fallback(
    endpoint: str, reason: FallbackReason, student_id: int | None, data: T
) -> Served[T]:
    FALLBACK_RESPONSES.labels(endpoint=endpoint, reason=reason.value).inc()
    if reason is FallbackReason.EMPTY:
        logger.info(
            "No data for student=%s on %s, serving placeholder data",
            student_id,
            endpoint,
            extra={"student_id": student_id, "fallback_reason": reason.value},
        )
    return Served(data, reason)


def _log_failure(endpoint: str, student_id: int | None) -> None:
    # Called from inside an except block so the traceback is attached.
    logger.exception(
        "%s failed for student=%s, serving placeholder data",
        endpoint,
        student_id,
        extra={
            "student_id": student_id,
            "fallback_reason": FallbackReason.ERROR.value,
        },
    )


# ---------------------------------------------------------------------------
# Dashboard stats
# ---------------------------------------------------------------------------


async def get_dashboard_stats(
    student_id: int,
    progress_repo: ProgressRepo,
    course_repo: CourseRepo,
    *,
    degrade: bool = True,
) -> Served[DashboardStats]:
    """Stats via the store's grouped aggregate plus a sort+limit query."""
    endpoint = "dashboard_stats"
    try:
        totals = await progress_repo.aggregate_totals(student_id)
        logger.debug("student=%s has %d progress records", student_id, totals.total_courses)
        if totals.total_courses == 0:
            if degrade:
                return _fallback(
                    endpoint, FallbackReason.EMPTY, student_id, PLACEHOLDER_STATS
                )
            return Served(DashboardStats())

        recent = await progress_repo.list_recent(student_id, RECENT_COURSES_LIMIT)
        courses = await _course_map(course_repo, (r.course_id for r in recent))
        return Served(stats_from_totals(totals, recent_courses(recent, courses)))
    except Exception:
        if not degrade:
            raise
        _log_failure(endpoint, student_id)
        return _fallback(endpoint, FallbackReason.ERROR, student_id, PLACEHOLDER_STATS)


async def get_dashboard_stats_simple(
    student_id: int,
    progress_repo: ProgressRepo,
    course_repo: CourseRepo,
    *,
    degrade: bool = True,
) -> Served[DashboardStats]:
    """Same numbers as get_dashboard_stats, computed by looping over records."""
    endpoint = "dashboard_stats_simple"
    try:
        records = await progress_repo.list_for_student(student_id)
        logger.debug("student=%s has %d progress records", student_id, len(records))
        if not records:
            if degrade:
                return _fallback(
                    endpoint, FallbackReason.EMPTY, student_id, PLACEHOLDER_STATS
                )
            return Served(DashboardStats())

        courses = await _course_map(course_repo, (r.course_id for r in records))
        return Served(compute_dashboard_stats(records, courses))
    except Exception:
        if not degrade:
            raise
        _log_failure(endpoint, student_id)
        return _fallback(endpoint, FallbackReason.ERROR, student_id, PLACEHOLDER_STATS)


# ---------------------------------------------------------------------------
# Progress trend
# ---------------------------------------------------------------------------


async def get_progress_trend(
    student_id: int,
    days: int,
    progress_repo: ProgressRepo,
    course_repo: CourseRepo,
    *,
    degrade: bool = True,
    demo_data: bool = True,
    now: datetime.datetime | None = None,
    rng: random.Random | None = None,
) -> Served[list[TrendPoint]]:
    """Daily activity for the trailing `days` window.

    When the window has no activity, demo data is served only if both
    degrade and demo_data are set.  Failures in degrade mode always get
    demo data.
    """
    endpoint = "progress_trend"
    now = now or _utcnow()
    since = window_start(now, days)
    try:
        records = await progress_repo.list_accessed_since(student_id, since)
        courses = await _course_map(course_repo, (r.course_id for r in records))
        points = compute_trend(records, courses, days, now)
        if not points and degrade and demo_data:
            return _fallback(
                endpoint,
                FallbackReason.EMPTY,
                student_id,
                synthetic_trend(days, now, rng),
            )
        return Served(points)
    except Exception:
        if not degrade:
            raise
        _log_failure(endpoint, student_id)
        return _fallback(
            endpoint, FallbackReason.ERROR, student_id, synthetic_trend(days, now, rng)
        )


# ---------------------------------------------------------------------------
# Course details
# ---------------------------------------------------------------------------


async def get_course_details(
    course_ids: list[int],
    course_repo: CourseRepo,
    *,
    degrade: bool = True,
) -> Served[list[Course]]:
    """Batch catalog lookup; placeholder courses stand in for an empty result."""
    if not course_ids:
        raise ValueError("course_ids must be non-empty")

    endpoint = "course_details"
    try:
        courses = await course_repo.get_many(set(course_ids))
        logger.debug("Courses found: %d of %d requested", len(courses), len(set(course_ids)))
        if not courses and degrade:
            return _fallback(
                endpoint, FallbackReason.EMPTY, None, placeholder_courses(course_ids)
            )
        return Served(courses)
    except Exception:
        if not degrade:
            raise
        _log_failure(endpoint, None)
        return _fallback(
            endpoint, FallbackReason.ERROR, None, placeholder_courses(course_ids)
        )


# ---------------------------------------------------------------------------
# Student progress, catalog overview, recommendations (no placeholder data)
# ---------------------------------------------------------------------------


async def get_student_progress(
    student_id: int, progress_repo: ProgressRepo
) -> StudentProgressSummary:
    records = await progress_repo.list_for_student(student_id)
    totals = summarize(records)
    return StudentProgressSummary(
        total_courses=totals.total_courses,
        total_time_spent=round1(totals.total_time_spent),
        average_progress=round_whole(totals.average_progress),
        completed_courses=totals.completed_courses,
        in_progress_courses=totals.in_progress_courses,
        course_progress=tuple(records),
    )


async def get_course_overview(
    student_id: int | None,
    progress_repo: ProgressRepo,
    course_repo: CourseRepo,
) -> CourseOverview:
    total = await course_repo.count()
    featured = tuple(await course_repo.list_courses(limit=FEATURED_COURSES_LIMIT))
    if student_id is None:
        return CourseOverview(total_courses=total, featured_courses=featured)

    records = await progress_repo.list_for_student(student_id)
    courses = await _course_map(course_repo, (r.course_id for r in records))
    return CourseOverview(
        total_courses=total,
        featured_courses=featured,
        user_progress=tuple(records),
        recent_activity=recent_courses(records, courses, RECENT_ACTIVITY_LIMIT),
    )


async def get_recommendations(
    student_id: int,
    progress_repo: ProgressRepo,
    course_repo: CourseRepo,
) -> list[Course]:
    """Catalog courses the student has not enrolled in yet."""
    enrolled = {r.course_id for r in await progress_repo.list_for_student(student_id)}
    return await course_repo.list_excluding(enrolled, RECOMMENDATIONS_LIMIT)
