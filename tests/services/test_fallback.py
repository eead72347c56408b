from __future__ import annotations

import dataclasses
import datetime
import random

import pytest

from learnboard.services.aggregation import compute_dashboard_stats
from learnboard.services.fallback import (
    COURSE_LESSONS_RANGE,
    COURSE_TIME_RANGE,
    DAILY_LESSONS_RANGE,
    DAILY_TIME_RANGE,
    PLACEHOLDER_COURSES,
    PLACEHOLDER_RECENT_COURSES,
    PLACEHOLDER_STATS,
    placeholder_courses,
    synthetic_trend,
)
from tests.conftest import NOW, make_record


def test_placeholder_stats_agree_with_placeholder_recent_courses() -> None:
    records = [
        make_record(
            rc.course_id,
            time_spent=rc.time_spent,
            progress=rc.progress,
            last_accessed=rc.last_accessed,
        )
        for rc in PLACEHOLDER_RECENT_COURSES
    ]
    computed = compute_dashboard_stats(
        records, {c.course_id: c for c in PLACEHOLDER_COURSES}
    )
    assert computed.total_time_spent == PLACEHOLDER_STATS.total_time_spent
    assert computed.average_progress == PLACEHOLDER_STATS.average_progress
    assert computed.in_progress_courses == PLACEHOLDER_STATS.in_progress_courses
    assert [r.title for r in computed.recent_courses] == [
        r.title for r in PLACEHOLDER_STATS.recent_courses
    ]


def test_placeholder_data_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        PLACEHOLDER_STATS.total_courses = 99  # type: ignore[misc]
    assert isinstance(PLACEHOLDER_COURSES, tuple)
    assert isinstance(PLACEHOLDER_STATS.recent_courses, tuple)


@pytest.mark.parametrize(
    ("ids", "expected"),
    [
        ([1, 2], [1, 2]),
        ([2], [2]),
        ([2, 1, 2], [1, 2]),
        ([3, 4], []),
    ],
)
def test_placeholder_courses_filters_by_id(ids: list[int], expected: list[int]) -> None:
    assert [c.course_id for c in placeholder_courses(ids)] == expected


# ---- synthetic trend ----


def test_synthetic_trend_has_one_point_per_day_through_today() -> None:
    points = synthetic_trend(6, NOW)
    assert len(points) == 7
    assert points[0].date == NOW.date() - datetime.timedelta(days=6)
    assert points[-1].date == NOW.date()
    dates = [p.date for p in points]
    assert dates == sorted(dates)
    assert len(set(dates)) == len(dates)


def test_synthetic_trend_days_zero_is_today_only() -> None:
    points = synthetic_trend(0, NOW)
    assert [p.date for p in points] == [NOW.date()]


def test_synthetic_trend_values_stay_in_range() -> None:
    for point in synthetic_trend(60, NOW, random.Random(7)):
        assert DAILY_TIME_RANGE[0] <= point.daily_time_spent <= DAILY_TIME_RANGE[1]
        assert (
            DAILY_LESSONS_RANGE[0]
            <= point.daily_lessons_completed
            <= DAILY_LESSONS_RANGE[1]
        )
        assert [c.course_id for c in point.courses] == [1, 2]
        for course in point.courses:
            assert COURSE_TIME_RANGE[0] <= course.time_spent <= COURSE_TIME_RANGE[1]
            assert (
                COURSE_LESSONS_RANGE[0]
                <= course.lessons_completed
                <= COURSE_LESSONS_RANGE[1]
            )


def test_synthetic_trend_is_reproducible_with_a_seeded_rng() -> None:
    first = synthetic_trend(10, NOW, random.Random(42))
    second = synthetic_trend(10, NOW, random.Random(42))
    assert first == second


def test_synthetic_trend_rejects_negative_days() -> None:
    with pytest.raises(ValueError):
        synthetic_trend(-1, NOW)
