"""Dashboard aggregation: progress records in, summary numbers out.

Everything here is a pure function over already-fetched data.  Fetching
(and the catalog join's first half, looking courses up by id) belongs to
the repos; the dashboard service wires the two together.

Two ways to get DashboardStats exist and must agree:

  compute_dashboard_stats() — walks the records itself (the "simple" path)
  stats_from_totals()       — rounds totals the store already aggregated

Both round through round1(), so identical inputs give identical output.
"""

from __future__ import annotations

import datetime
import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal

from learnboard.models.course import Course
from learnboard.models.dashboard import (
    DashboardStats,
    ProgressTotals,
    RecentCourse,
    TrendCourse,
    TrendPoint,
)
from learnboard.models.progress import ProgressRecord, record_problems

logger = logging.getLogger(__name__)

RECENT_COURSES_LIMIT = 4

_ONE_DECIMAL = Decimal("0.1")
_EPOCH = datetime.datetime.min.replace(tzinfo=datetime.UTC)


def round1(value: float) -> float:
    """Round to one decimal place, halves away from zero.

    Python's round() does banker's rounding on the binary value, so
    round(0.25, 1) == 0.2.  Going through the shortest decimal repr gives
    the 0.3 a person would expect.
    """
    return float(Decimal(repr(float(value))).quantize(_ONE_DECIMAL, ROUND_HALF_UP))


def round_whole(value: float) -> int:
    return int(Decimal(repr(float(value))).quantize(Decimal(1), ROUND_HALF_UP))


def finite_or_zero(value: float) -> float:
    """NaN and infinities count as nothing; storage does not stop them."""
    return value if math.isfinite(value) else 0.0


def as_utc(moment: datetime.datetime) -> datetime.datetime:
    """Naive datetimes coming out of storage are taken to be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=datetime.UTC)
    return moment.astimezone(datetime.UTC)


def _sort_key(record: ProgressRecord) -> datetime.datetime:
    if record.last_accessed is None:
        return _EPOCH
    return as_utc(record.last_accessed)


def order_recent(
    records: Iterable[ProgressRecord], limit: int = RECENT_COURSES_LIMIT
) -> list[ProgressRecord]:
    """Most recently accessed first; ties keep ascending course_id."""
    by_course = sorted(records, key=lambda r: r.course_id)
    by_course.sort(key=_sort_key, reverse=True)
    return by_course[: max(limit, 0)]


def recent_courses(
    records: Iterable[ProgressRecord],
    courses: Mapping[int, Course],
    limit: int = RECENT_COURSES_LIMIT,
) -> tuple[RecentCourse, ...]:
    """Order records by recency and left-join them to the catalog."""
    return tuple(
        to_recent_course(record, courses.get(record.course_id))
        for record in order_recent(records, limit)
    )


def to_recent_course(record: ProgressRecord, course: Course | None) -> RecentCourse:
    if course is None:
        return RecentCourse(
            course_id=record.course_id,
            completed_lessons=record.completed_lessons,
            total_lessons=record.total_lessons,
            time_spent=finite_or_zero(record.time_spent),
            progress=finite_or_zero(record.progress),
            last_accessed=record.last_accessed,
        )
    return RecentCourse(
        course_id=record.course_id,
        completed_lessons=record.completed_lessons,
        total_lessons=record.total_lessons,
        time_spent=finite_or_zero(record.time_spent),
        progress=finite_or_zero(record.progress),
        last_accessed=record.last_accessed,
        title=course.title,
        description=course.description,
        thumbnail=course.thumbnail,
    )


def summarize(records: Sequence[ProgressRecord]) -> ProgressTotals:
    """Unrounded totals over records; the in-process twin of the store aggregate."""
    if not records:
        return ProgressTotals()

    total_time = 0.0
    total_progress = 0.0
    completed = 0
    in_progress = 0
    for record in records:
        problems = record_problems(record)
        if problems:
            logger.warning(
                "Malformed progress record student=%s course=%s: %s",
                record.student_id,
                record.course_id,
                "; ".join(problems),
            )
        total_time += finite_or_zero(record.time_spent)
        total_progress += finite_or_zero(record.progress)
        if record.is_completed:
            completed += 1
        elif record.is_in_progress:
            in_progress += 1

    return ProgressTotals(
        total_courses=len(records),
        total_time_spent=total_time,
        average_progress=total_progress / len(records),
        completed_courses=completed,
        in_progress_courses=in_progress,
    )


def stats_from_totals(
    totals: ProgressTotals, recent: Sequence[RecentCourse] = ()
) -> DashboardStats:
    if totals.total_courses == 0:
        return DashboardStats()
    return DashboardStats(
        total_courses=totals.total_courses,
        total_time_spent=round1(totals.total_time_spent),
        average_progress=round1(totals.average_progress),
        completed_courses=totals.completed_courses,
        in_progress_courses=totals.in_progress_courses,
        recent_courses=tuple(recent),
    )


def compute_dashboard_stats(
    records: Sequence[ProgressRecord],
    courses: Mapping[int, Course],
    limit: int = RECENT_COURSES_LIMIT,
) -> DashboardStats:
    """Stats for one student's records, computed with plain loops.

    An empty record list gives zero-valued stats; substituting placeholder
    data for that case is the caller's decision.
    """
    return stats_from_totals(summarize(records), recent_courses(records, courses, limit))


def window_start(now: datetime.datetime, window_days: int) -> datetime.datetime:
    if window_days < 0:
        raise ValueError("window_days must be >= 0")
    return now - datetime.timedelta(days=window_days)


def compute_trend(
    records: Iterable[ProgressRecord],
    courses: Mapping[int, Course],
    window_days: int,
    now: datetime.datetime,
) -> list[TrendPoint]:
    """Per-day activity over the trailing window, oldest day first.

    Records are bucketed by the UTC calendar date of last_accessed.  Groups
    whose course is missing from the catalog are dropped.  Days without
    activity are simply absent.
    """
    now = as_utc(now)
    since = window_start(now, window_days)

    # (date, course_id) -> [time_spent, lessons_completed]
    groups: dict[tuple[datetime.date, int], list[float]] = defaultdict(
        lambda: [0.0, 0]
    )
    for record in records:
        if record.last_accessed is None:
            continue
        accessed = as_utc(record.last_accessed)
        if not since <= accessed <= now:
            continue
        bucket = groups[(accessed.date(), record.course_id)]
        bucket[0] += finite_or_zero(record.time_spent)
        bucket[1] += record.completed_lessons

    by_day: dict[datetime.date, list[tuple[int, float, int]]] = defaultdict(list)
    for (day, course_id), (time_spent, lessons) in groups.items():
        if course_id not in courses:
            logger.debug("Trend group dropped: course=%s not in catalog", course_id)
            continue
        by_day[day].append((course_id, time_spent, int(lessons)))

    points: list[TrendPoint] = []
    for day in sorted(by_day):
        entries = sorted(by_day[day])
        points.append(
            TrendPoint(
                date=day,
                daily_time_spent=round1(sum(e[1] for e in entries)),
                daily_lessons_completed=sum(e[2] for e in entries),
                courses=tuple(
                    TrendCourse(
                        course_id=course_id,
                        title=courses[course_id].title,
                        time_spent=round1(time_spent),
                        lessons_completed=lessons,
                    )
                    for course_id, time_spent, lessons in entries
                ),
            )
        )
    return points
