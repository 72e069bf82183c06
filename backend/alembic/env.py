"""Alembic environment — runs BloodBond migrations on the async engine.

The URL comes from app settings (DATABASE_URL, already rewritten to the
asyncpg driver); sqlalchemy.url in alembic.ini is only the local fallback.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

import app.models  # noqa: F401  (registers donation_requests, fund_records, user_accounts)
from app.config import get_settings
from app.db.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _migration_url() -> str:
    return get_settings().database_url or config.get_main_option("sqlalchemy.url")


def _configure_and_run(connection=None, url: str | None = None) -> None:
    if connection is not None:
        context.configure(connection=connection, target_metadata=target_metadata)
    else:
        context.configure(
            url=url,
            target_metadata=target_metadata,
            literal_binds=True,
            dialect_opts={"paramstyle": "named"},
        )
    with context.begin_transaction():
        context.run_migrations()


async def _run_online() -> None:
    engine = create_async_engine(_migration_url(), poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(_configure_and_run)
    await engine.dispose()


if context.is_offline_mode():
    _configure_and_run(url=_migration_url())
else:
    asyncio.run(_run_online())
