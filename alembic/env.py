"""Alembic environment for the learnboard schema.

The database URL comes from DATABASE_URL via learnboard.core.config, the
same setting the API reads, so migrations and the app always target the
same database.  alembic.ini only carries a placeholder.
"""

from __future__ import annotations

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context
from learnboard.core.config import SETTINGS
from learnboard.db import tables  # noqa: F401  registers the tables on Base.metadata
from learnboard.db.engine import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _sync_url(url: str) -> str:
    # Migrations run synchronously on psycopg2, the app runs on asyncpg.
    return url.replace("postgresql+asyncpg://", "postgresql://", 1)


if SETTINGS.database_url:
    config.set_main_option("sqlalchemy.url", _sync_url(SETTINGS.database_url))


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of running it."""
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
