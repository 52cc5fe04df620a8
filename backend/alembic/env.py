"""
Alembic Migration Environment
===============================

What:  Runs the catalogo_ramos / pedido migrations against DATABASE_URL.
How:   The URL comes from app.config.settings, never from alembic.ini, so the
       API and its migrations always target the same database. Migrations
       run on an async engine (asyncpg in production) through
       connection.run_sync().
Who:   `alembic upgrade head` etc., run from the backend/ directory.

Dialect notes:
    - compare_type=True so --autogenerate notices column changes such as
      String(100) → String(150) on categoria, or NUMERIC precision on valor
    - SQLite (local development) cannot ALTER columns in place; migrations
      are rendered in batch mode there
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from app.config import settings
from app.database import Base

# Registers Ramo and Pedido on Base.metadata
import app.models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

config.set_main_option("sqlalchemy.url", settings.database_url)

MIGRATION_OPTIONS = {
    "target_metadata": target_metadata,
    "compare_type": True,
    "render_as_batch": settings.is_sqlite,
}


def run_migrations_offline() -> None:
    """`alembic upgrade head --sql`: print the DDL instead of applying it."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **MIGRATION_OPTIONS,
    )

    with context.begin_transaction():
        context.run_migrations()


def apply_migrations(connection) -> None:
    context.configure(connection=connection, **MIGRATION_OPTIONS)

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    # NullPool: one short-lived connection for the whole upgrade
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(apply_migrations)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
