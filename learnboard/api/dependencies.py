from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from learnboard.api.errors import INVALID_USER_ID_MESSAGE, USER_ID_REQUIRED_MESSAGE
from learnboard.core.config import SETTINGS, Settings
from learnboard.db.engine import get_read_session
from learnboard.repos.course_repo import CourseRepo, InMemoryCourseRepo
from learnboard.repos.pg_course_repo import PgCourseRepo
from learnboard.repos.pg_progress_repo import PgProgressRepo
from learnboard.repos.progress_repo import InMemoryProgressRepo, ProgressRepo

logger = logging.getLogger(__name__)

# In-memory stores, used whenever DATABASE_URL is not configured.
progress_repo = InMemoryProgressRepo()
course_repo = InMemoryCourseRepo()


def get_settings() -> Settings:
    """Overridable in tests via app.dependency_overrides."""
    return SETTINGS


def get_progress_repo(
    session: Annotated[AsyncSession | None, Depends(get_read_session)],
) -> ProgressRepo:
    if session is None:
        return progress_repo
    return PgProgressRepo(session)


def get_course_repo(
    session: Annotated[AsyncSession | None, Depends(get_read_session)],
) -> CourseRepo:
    if session is None:
        return course_repo
    return PgCourseRepo(session)


def parse_user_id(raw: str | None) -> int | None:
    """`?userId=` as a student id; absent or blank means "not given".

    Anything else that is not a positive integer is a 400.
    """
    if raw is None or not raw.strip():
        return None
    try:
        user_id = int(raw.strip())
    except ValueError:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST, INVALID_USER_ID_MESSAGE
        ) from None
    if user_id < 1:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, INVALID_USER_ID_MESSAGE)
    return user_id


def optional_user_id(
    raw: Annotated[str | None, Query(alias="userId")] = None,
) -> int | None:
    return parse_user_id(raw)


def resolve_student_id(
    settings: Annotated[Settings, Depends(get_settings)],
    user_id: Annotated[int | None, Depends(optional_user_id)],
) -> int:
    """`?userId=` from the query string, or the configured default student."""
    if user_id is None:
        logger.debug("No userId provided, using default: %s", settings.default_student_id)
        return settings.default_student_id
    return user_id


def required_user_id(
    user_id: Annotated[int | None, Depends(optional_user_id)],
) -> int:
    if user_id is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, USER_ID_REQUIRED_MESSAGE)
    return user_id


ProgressRepoDep = Annotated[ProgressRepo, Depends(get_progress_repo)]
CourseRepoDep = Annotated[CourseRepo, Depends(get_course_repo)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
StudentIdDep = Annotated[int, Depends(resolve_student_id)]
OptionalUserIdDep = Annotated[int | None, Depends(optional_user_id)]
RequiredUserIdDep = Annotated[int, Depends(required_user_id)]
