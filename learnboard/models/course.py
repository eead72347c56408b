from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Course:
    """Catalog entry. Reference data, written by catalog management."""

    course_id: int
    title: str
    description: str = ""
    thumbnail: str = ""
    total_lessons: int = 0

    @staticmethod
    def new(
        *,
        course_id: int,
        title: str,
        description: str = "",
        thumbnail: str = "",
        total_lessons: int = 0,
    ) -> Course:
        if course_id < 1:
            raise ValueError("course_id must be a positive integer")
        if not title.strip():
            raise ValueError("title must be non-empty")
        if total_lessons < 0:
            raise ValueError("total_lessons must be >= 0")
        return Course(
            course_id=course_id,
            title=title.strip(),
            description=description,
            thumbnail=thumbnail,
            total_lessons=total_lessons,
        )
