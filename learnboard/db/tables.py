"""SQLAlchemy table definitions.

These map to the frozen dataclass domain models in learnboard/models/.
Repos convert between SQLAlchemy rows and domain dataclasses.
"""

from __future__ import annotations

import datetime

from sqlalchemy import (
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from learnboard.db.engine import Base


class CourseRow(Base):
    __tablename__ = "courses"

    course_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    thumbnail: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    total_lessons: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class StudentProgressRow(Base):
    __tablename__ = "student_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_student_progress_user_course"),
        Index("ix_student_progress_user_last_accessed", "user_id", "last_accessed"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # No FK to courses: progress may reference courses the catalog lacks.
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    course_id: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_lessons: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_lessons: Mapped[int] = mapped_column(Integer, nullable=False)
    time_spent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    progress: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    last_accessed: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    enrolled_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
