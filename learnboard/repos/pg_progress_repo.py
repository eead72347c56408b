"""PostgreSQL implementation of ProgressRepo."""

from __future__ import annotations

import datetime

from sqlalchemy import case, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from learnboard.db.tables import StudentProgressRow
from learnboard.models.dashboard import ProgressTotals
from learnboard.models.progress import ProgressRecord


class PgProgressRepo:
    """Satisfies the ProgressRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_student(self, student_id: int) -> list[ProgressRecord]:
        stmt = (
            select(StudentProgressRow)
            .where(StudentProgressRow.user_id == student_id)
            .order_by(StudentProgressRow.course_id)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_record(row) for row in rows]

    async def list_recent(self, student_id: int, limit: int) -> list[ProgressRecord]:
        stmt = (
            select(StudentProgressRow)
            .where(StudentProgressRow.user_id == student_id)
            .order_by(
                StudentProgressRow.last_accessed.desc().nulls_last(),
                StudentProgressRow.course_id,
            )
            .limit(limit)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_record(row) for row in rows]

    async def list_accessed_since(
        self, student_id: int, since: datetime.datetime
    ) -> list[ProgressRecord]:
        stmt = (
            select(StudentProgressRow)
            .where(
                StudentProgressRow.user_id == student_id,
                StudentProgressRow.last_accessed >= since,
            )
            .order_by(StudentProgressRow.last_accessed)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_record(row) for row in rows]

    async def aggregate_totals(self, student_id: int) -> ProgressTotals:
        progress = StudentProgressRow.progress
        stmt = select(
            func.count(),
            func.coalesce(func.sum(_finite(StudentProgressRow.time_spent)), 0.0),
            func.coalesce(func.avg(_finite(progress)), 0.0),
            func.coalesce(func.sum(case((progress == 100, 1), else_=0)), 0),
            func.coalesce(
                func.sum(case(((progress > 0) & (progress < 100), 1), else_=0)), 0
            ),
        ).where(StudentProgressRow.user_id == student_id)
        count, time_sum, avg_progress, completed, in_progress = (
            await self._session.execute(stmt)
        ).one()
        return ProgressTotals(
            total_courses=int(count),
            total_time_spent=float(time_sum),
            average_progress=float(avg_progress),
            completed_courses=int(completed),
            in_progress_courses=int(in_progress),
        )

    async def upsert(self, record: ProgressRecord) -> None:
        values = {
            "user_id": record.student_id,
            "course_id": record.course_id,
            "completed_lessons": record.completed_lessons,
            "total_lessons": record.total_lessons,
            "time_spent": record.time_spent,
            "progress": record.progress,
            "last_accessed": record.last_accessed,
            "enrolled_at": record.enrolled_at,
        }
        stmt = insert(StudentProgressRow).values(**values)
        stmt = stmt.on_conflict_do_update(
            constraint="uq_student_progress_user_course",
            set_={
                key: stmt.excluded[key]
                for key in (
                    "completed_lessons",
                    "total_lessons",
                    "time_spent",
                    "progress",
                    "last_accessed",
                )
            },
        )
        await self._session.execute(stmt)


_NON_FINITE = (float("nan"), float("inf"), float("-inf"))


def _finite(column):
    # float8 accepts NaN and Infinity; they sum as zero, like the in-process path.
    return case((column.in_(_NON_FINITE), 0.0), else_=column)


def _row_to_record(row: StudentProgressRow) -> ProgressRecord:
    return ProgressRecord(
        student_id=row.user_id,
        course_id=row.course_id,
        total_lessons=row.total_lessons,
        completed_lessons=row.completed_lessons,
        time_spent=row.time_spent,
        progress=row.progress,
        last_accessed=row.last_accessed,
        enrolled_at=row.enrolled_at,
    )
