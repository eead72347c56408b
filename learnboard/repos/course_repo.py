from __future__ import annotations

from collections.abc import Collection
from typing import Protocol

from learnboard.models.course import Course


class CourseRepo(Protocol):
    async def get_many(self, course_ids: Collection[int]) -> list[Course]: ...
    async def count(self) -> int: ...
    async def list_courses(self, limit: int | None = None) -> list[Course]: ...
    async def list_excluding(
        self, course_ids: Collection[int], limit: int
    ) -> list[Course]: ...
    async def add(self, course: Course) -> None: ...


class InMemoryCourseRepo:
    def __init__(self) -> None:
        self._by_id: dict[int, Course] = {}

    async def get_many(self, course_ids: Collection[int]) -> list[Course]:
        wanted = set(course_ids)
        return [c for cid, c in sorted(self._by_id.items()) if cid in wanted]

    async def count(self) -> int:
        return len(self._by_id)

    async def list_courses(self, limit: int | None = None) -> list[Course]:
        courses = [c for _, c in sorted(self._by_id.items())]
        return courses if limit is None else courses[:limit]

    async def list_excluding(
        self, course_ids: Collection[int], limit: int
    ) -> list[Course]:
        excluded = set(course_ids)
        return [c for c in await self.list_courses() if c.course_id not in excluded][
            :limit
        ]

    async def add(self, course: Course) -> None:
        if course.course_id in self._by_id:
            raise ValueError("course_id already exists")
        self._by_id[course.course_id] = course
