"""create courses and student_progress

Revision ID: 3b9e1c4d7a21
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b9e1c4d7a21"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "courses",
        sa.Column("course_id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("thumbnail", sa.String(length=512), nullable=False, server_default=""),
        sa.Column("total_lessons", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_table(
        "student_progress",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("completed_lessons", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_lessons", sa.Integer(), nullable=False),
        sa.Column("time_spent", sa.Float(), nullable=False, server_default="0"),
        sa.Column("progress", sa.Float(), nullable=False, server_default="0"),
        sa.Column(
            "last_accessed",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "enrolled_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint(
            "user_id", "course_id", name="uq_student_progress_user_course"
        ),
    )
    op.create_index(
        "ix_student_progress_user_last_accessed",
        "student_progress",
        ["user_id", "last_accessed"],
    )


def downgrade() -> None:
    op.drop_index("ix_student_progress_user_last_accessed", table_name="student_progress")
    op.drop_table("student_progress")
    op.drop_table("courses")
