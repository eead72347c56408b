"""PostgreSQL implementation of CourseRepo."""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from learnboard.db.tables import CourseRow
from learnboard.models.course import Course


class PgCourseRepo:
    """Satisfies the CourseRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_many(self, course_ids: Collection[int]) -> list[Course]:
        if not course_ids:
            return []
        stmt = (
            select(CourseRow)
            .where(CourseRow.course_id.in_(list(course_ids)))
            .order_by(CourseRow.course_id)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_course(row) for row in rows]

    async def count(self) -> int:
        stmt = select(func.count()).select_from(CourseRow)
        return int((await self._session.execute(stmt)).scalar_one())

    async def list_courses(self, limit: int | None = None) -> list[Course]:
        stmt = select(CourseRow).order_by(CourseRow.course_id)
        if limit is not None:
            stmt = stmt.limit(limit)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_course(row) for row in rows]

    async def list_excluding(
        self, course_ids: Collection[int], limit: int
    ) -> list[Course]:
        stmt = select(CourseRow).order_by(CourseRow.course_id).limit(limit)
        if course_ids:
            stmt = stmt.where(CourseRow.course_id.not_in(list(course_ids)))
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_course(row) for row in rows]

    async def add(self, course: Course) -> None:
        row = CourseRow(
            course_id=course.course_id,
            title=course.title,
            description=course.description,
            thumbnail=course.thumbnail,
            total_lessons=course.total_lessons,
        )
        self._session.add(row)
        await self._session.flush()


def _row_to_course(row: CourseRow) -> Course:
    return Course(
        course_id=row.course_id,
        title=row.title,
        description=row.description or "",
        thumbnail=row.thumbnail or "",
        total_lessons=row.total_lessons,
    )
