"""Async SQLAlchemy engine for the progress store and course catalog.

Everything here is optional.  With DATABASE_URL unset, `engine` and
`async_session_factory` are None, get_read_session() yields None and the
API dependencies hand out the in-memory repos instead.

The dashboard endpoints only read, and they are expected to survive a
failing query (placeholder data, 200), so they get a session that is
never committed.  get_async_session() is the read-write variant for
scripts that write progress or catalog rows.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from learnboard.core.config import SETTINGS

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _build_engine(url: str) -> AsyncEngine:
    return create_async_engine(
        url,
        echo=SETTINGS.is_dev,
        # Dropped connections show up as a failed health check, not a 500.
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


engine: AsyncEngine | None = None
async_session_factory: async_sessionmaker[AsyncSession] | None = None

if SETTINGS.database_url:
    engine = _build_engine(SETTINGS.database_url)
    async_session_factory = async_sessionmaker(engine, expire_on_commit=False)


async def get_read_session() -> AsyncGenerator[AsyncSession | None, None]:
    """Session for a read-only request, or None when no database is configured.

    Closing the session rolls back whatever a failed query left behind,
    so a recovered error never turns into a failed commit.
    """
    if async_session_factory is None:
        yield None
        return
    async with async_session_factory() as session:
        yield session


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Read-write session: commit when the caller finishes, roll back on error."""
    if async_session_factory is None:
        raise RuntimeError("DATABASE_URL is not configured")
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def lifespan_db():
    if engine is None:
        logger.info("No DATABASE_URL configured, serving from in-memory stores")
        yield
        return

    logger.info("Progress store: %s", engine.url.render_as_string(hide_password=True))
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("Database engine disposed")
