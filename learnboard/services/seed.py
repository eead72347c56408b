"""Development data for the in-memory stores."""

from __future__ import annotations

import datetime
import logging

from learnboard.models.course import Course
from learnboard.models.progress import ProgressRecord
from learnboard.repos.course_repo import CourseRepo
from learnboard.repos.progress_repo import ProgressRepo
from learnboard.services.fallback import PLACEHOLDER_COURSES

logger = logging.getLogger(__name__)

DEMO_STUDENT_ID = 1

_EXTRA_COURSES = (
    Course.new(
        course_id=3,
        title="Node.js APIs",
        description="Build REST services with Express",
        thumbnail="node.png",
        total_lessons=6,
    ),
    Course.new(
        course_id=4,
        title="CSS Layout Mastery",
        description="Flexbox and grid in practice",
        thumbnail="css.png",
        total_lessons=5,
    ),
)


async def seed_demo_data(
    progress_repo: ProgressRepo,
    course_repo: CourseRepo,
    *,
    now: datetime.datetime | None = None,
) -> int:
    """Load a small catalog and progress for DEMO_STUDENT_ID.

    Courses that already exist are left alone.  Returns the number of
    progress records written.
    """
    now = now or datetime.datetime.now(datetime.UTC)

    for course in (*PLACEHOLDER_COURSES, *_EXTRA_COURSES):
        if await course_repo.get_many([course.course_id]):
            continue
        await course_repo.add(course)

    records = [
        ProgressRecord.new(
            student_id=DEMO_STUDENT_ID,
            course_id=1,
            total_lessons=4,
            completed_lessons=2,
            time_spent=8.5,
            progress=50,
            last_accessed=now - datetime.timedelta(days=1),
            enrolled_at=now - datetime.timedelta(days=20),
        ),
        ProgressRecord.new(
            student_id=DEMO_STUDENT_ID,
            course_id=2,
            total_lessons=4,
            completed_lessons=1,
            time_spent=5.2,
            progress=25,
            last_accessed=now - datetime.timedelta(days=2),
            enrolled_at=now - datetime.timedelta(days=15),
        ),
        ProgressRecord.new(
            student_id=DEMO_STUDENT_ID,
            course_id=3,
            total_lessons=6,
            completed_lessons=6,
            time_spent=11.0,
            progress=100,
            last_accessed=now - datetime.timedelta(days=9),
            enrolled_at=now - datetime.timedelta(days=40),
        ),
    ]
    for record in records:
        await progress_repo.upsert(record)

    logger.info(
        "Seeded %d courses and %d progress records for student=%s",
        len(PLACEHOLDER_COURSES) + len(_EXTRA_COURSES),
        len(records),
        DEMO_STUDENT_ID,
    )
    return len(records)
