from __future__ import annotations

import datetime
import math
from dataclasses import dataclass


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


@dataclass(frozen=True, slots=True)
class ProgressRecord:
    """One student's tracked state for one course.

    Unique per (student_id, course_id).  Updated in place whenever the
    student makes progress; never deleted in normal operation.

    Rows read back from storage are built with the plain constructor and
    are NOT validated: completed_lessons > total_lessons can and does
    happen, and the aggregation code has to live with it.  Use new() for
    anything this service writes.
    """

    student_id: int
    course_id: int
    total_lessons: int
    completed_lessons: int = 0
    time_spent: float = 0.0  # hours
    progress: float = 0.0  # percent, 0-100
    last_accessed: datetime.datetime | None = None
    enrolled_at: datetime.datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.progress == 100

    @property
    def is_in_progress(self) -> bool:
        return 0 < self.progress < 100

    @staticmethod
    def new(
        *,
        student_id: int,
        course_id: int,
        total_lessons: int,
        completed_lessons: int = 0,
        time_spent: float = 0.0,
        progress: float = 0.0,
        last_accessed: datetime.datetime | None = None,
        enrolled_at: datetime.datetime | None = None,
    ) -> ProgressRecord:
        problems = shape_problems(
            completed_lessons=completed_lessons,
            total_lessons=total_lessons,
            time_spent=time_spent,
            progress=progress,
        )
        if problems:
            raise ValueError("; ".join(problems))

        now = _utcnow()
        return ProgressRecord(
            student_id=student_id,
            course_id=course_id,
            total_lessons=total_lessons,
            completed_lessons=completed_lessons,
            time_spent=float(time_spent),
            progress=float(progress),
            last_accessed=last_accessed or now,
            enrolled_at=enrolled_at or now,
        )


def shape_problems(
    *,
    completed_lessons: int,
    total_lessons: int,
    time_spent: float,
    progress: float,
) -> list[str]:
    """Return human-readable violations of the record invariants.

    An empty list means the values describe a well-formed record.
    """
    problems: list[str] = []
    if completed_lessons < 0:
        problems.append("completed_lessons must be >= 0")
    if total_lessons < 1:
        problems.append("total_lessons must be >= 1")
    if completed_lessons > total_lessons >= 1:
        problems.append("completed_lessons must not exceed total_lessons")
    if not math.isfinite(time_spent) or time_spent < 0:
        problems.append("time_spent must be a finite number >= 0")
    if not math.isfinite(progress) or not 0 <= progress <= 100:
        problems.append("progress must be between 0 and 100")
    return problems


def record_problems(record: ProgressRecord) -> list[str]:
    return shape_problems(
        completed_lessons=record.completed_lessons,
        total_lessons=record.total_lessons,
        time_spent=record.time_spent,
        progress=record.progress,
    )
