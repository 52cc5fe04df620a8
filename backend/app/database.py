"""
Floreria Backend — Database Session Management
================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   create_app() builds ONE engine (connection pool) and ONE session factory
       per application and keeps them on app.state. Each request gets its own
       AsyncSession from get_db_session(), which commits on success and rolls
       back on error.
Who:   Route dependencies in app/routes/dependencies.py; Alembic (Base).

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from Settings.
    SQLite URLs (used by the test suite) skip the pool arguments and let
    SQLAlchemy pick its default pool for the driver.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations.
    """
    pass


# ── Engine / Session Factory ──────────────────────────────────────────────

def build_engine(app_settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database URL.

    Called once per application (create_app); the engine owns the pool.
    """
    engine_kwargs = {
        # Echo SQL only when debugging
        "echo": app_settings.log_level == "DEBUG",
    }
    if not app_settings.is_sqlite:
        engine_kwargs.update(
            pool_size=app_settings.db_pool_size,
            max_overflow=app_settings.db_max_overflow,
            pool_pre_ping=app_settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(app_settings.database_url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: attributes (e.g. a new row's id) stay readable after commit
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app-scoped factory
        2. Yields it to the route handler
        3. On success: commits (a no-op when the service already committed)
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine(engine: AsyncEngine) -> None:
    """Close all pooled connections (application shutdown)."""
    await engine.dispose()
