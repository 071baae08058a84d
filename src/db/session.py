"""Async SQLAlchemy engine and session wiring."""
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the process-wide async engine.

    SQLite uses its own pool implementation, so pool sizing only applies to
    server databases.
    """
    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite":
        return create_async_engine(url, echo=False)
    return create_async_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to `engine`."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """
    Yield an async database session.

    The session factory is created in the app lifespan and stored on app.state.
    Uses unit-of-work pattern: services use flush() for refreshing objects,
    commit happens once here at request end. If anything fails, all changes are
    rolled back.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
