"""Async database engine and session management.

One engine per process, shared by the API (``get_db``) and standalone
scripts (``session_scope``). Both commit when the caller's block finishes
and roll back when it raises. SQL echo follows LOG_LEVEL=DEBUG.
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=settings.log_level.upper() == "DEBUG",
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Open a session that commits on success and rolls back on error.

    Usage:
        async with session_scope() as db:
            await run_seed(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a request-scoped database session."""
    async with session_scope() as session:
        yield session


async def dispose_engine() -> None:
    """Close pooled connections (application shutdown, end of a script)."""
    await engine.dispose()
