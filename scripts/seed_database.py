"""Seed the configured PostgreSQL database with the demo catalog and progress.

Requires DATABASE_URL and an up-to-date schema (`alembic upgrade head`).

Run with:
    DATABASE_URL=postgresql+asyncpg://... python scripts/seed_database.py
"""

from __future__ import annotations

import asyncio
import logging

from learnboard.core.config import SETTINGS
from learnboard.core.logging import setup_logging
from learnboard.db.engine import engine, get_async_session
from learnboard.repos.pg_course_repo import PgCourseRepo
from learnboard.repos.pg_progress_repo import PgProgressRepo
from learnboard.services.seed import seed_demo_data

logger = logging.getLogger("seed_database")


async def main() -> None:
    if engine is None:
        raise SystemExit("DATABASE_URL is not configured")

    async for session in get_async_session():
        written = await seed_demo_data(PgProgressRepo(session), PgCourseRepo(session))
        logger.info("Wrote %d progress records", written)

    await engine.dispose()


if __name__ == "__main__":
    setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
    asyncio.run(main())
