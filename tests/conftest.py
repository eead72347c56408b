from __future__ import annotations

import asyncio
import datetime
import sys
from collections.abc import Iterator
from dataclasses import replace
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure repo root is on sys.path so `import learnboard` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from learnboard.api.dependencies import (  # noqa: E402
    course_repo,
    get_course_repo,
    get_progress_repo,
    get_settings,
    progress_repo,
)
from learnboard.core.config import SETTINGS, Settings  # noqa: E402
from learnboard.main import app  # noqa: E402
from learnboard.models.course import Course  # noqa: E402
from learnboard.models.dashboard import ProgressTotals  # noqa: E402
from learnboard.models.progress import ProgressRecord  # noqa: E402

NOW = datetime.datetime(2026, 10, 19, 12, 0, tzinfo=datetime.UTC)


@pytest.fixture(autouse=True)
def reset_stores() -> None:
    """Clear the in-memory progress store and catalog between tests."""
    progress_repo._store.clear()
    course_repo._by_id.clear()


@pytest.fixture(autouse=True)
def reset_overrides() -> Iterator[None]:
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


# ---------------------------------------------------------------------------
# Settings helpers
# ---------------------------------------------------------------------------


def use_settings(**changes) -> Settings:
    """Override the settings dependency for the rest of the test."""
    settings = replace(SETTINGS, **changes)
    app.dependency_overrides[get_settings] = lambda: settings
    return settings


@pytest.fixture
def strict_mode() -> Settings:
    return use_settings(fallback_mode="strict")


# ---------------------------------------------------------------------------
# Data helpers
# ---------------------------------------------------------------------------


def make_record(
    course_id: int,
    *,
    student_id: int = 1,
    time_spent: float = 1.0,
    progress: float = 50,
    completed_lessons: int = 1,
    total_lessons: int = 4,
    last_accessed: datetime.datetime | None = None,
) -> ProgressRecord:
    """Build a record without validation, the way rows come out of storage."""
    return ProgressRecord(
        student_id=student_id,
        course_id=course_id,
        total_lessons=total_lessons,
        completed_lessons=completed_lessons,
        time_spent=time_spent,
        progress=progress,
        last_accessed=last_accessed or NOW - datetime.timedelta(hours=course_id),
        enrolled_at=NOW - datetime.timedelta(days=60),
    )


def make_course(course_id: int, title: str | None = None) -> Course:
    return Course(
        course_id=course_id,
        title=title or f"Course {course_id}",
        description=f"About course {course_id}",
        thumbnail=f"c{course_id}.png",
        total_lessons=4,
    )


def add_progress(*records: ProgressRecord) -> None:
    for record in records:
        asyncio.run(progress_repo.upsert(record))


def add_courses(*courses: Course) -> None:
    for course in courses:
        asyncio.run(course_repo.add(course))


# ---------------------------------------------------------------------------
# Failing stores
# ---------------------------------------------------------------------------


class StoreUnavailable(RuntimeError):
    pass


class FailingProgressRepo:
    """Every call raises, like a progress store that lost its connection."""

    def __init__(self) -> None:
        self.calls = 0

    async def _fail(self, *_args, **_kwargs):
        self.calls += 1
        raise StoreUnavailable("progress store unavailable")

    list_for_student = _fail
    list_recent = _fail
    list_accessed_since = _fail
    upsert = _fail

    async def aggregate_totals(self, student_id: int) -> ProgressTotals:
        return await self._fail(student_id)


class FailingCourseRepo:
    def __init__(self) -> None:
        self.calls = 0

    async def _fail(self, *_args, **_kwargs):
        self.calls += 1
        raise StoreUnavailable("course catalog unavailable")

    get_many = _fail
    count = _fail
    list_courses = _fail
    list_excluding = _fail
    add = _fail


@pytest.fixture
def failing_progress_repo() -> FailingProgressRepo:
    repo = FailingProgressRepo()
    app.dependency_overrides[get_progress_repo] = lambda: repo
    return repo


@pytest.fixture
def failing_course_repo() -> FailingCourseRepo:
    repo = FailingCourseRepo()
    app.dependency_overrides[get_course_repo] = lambda: repo
    return repo
