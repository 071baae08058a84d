"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator

# Settings are read when api.main is imported, so these must be set first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("API_TOKEN", "test-api-token")

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.config import Settings, get_settings  # noqa: E402
from models.base import Base  # noqa: E402

TEST_API_TOKEN = "test-api-token"
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings() -> Settings:
    """Settings used by the app under test, independent of the local environment."""
    return Settings(
        _env_file=None,
        database_url=TEST_DATABASE_URL,
        api_token=TEST_API_TOKEN,
        environment="development",
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Create an in-memory SQLite engine with a fresh schema.

    StaticPool keeps the single connection alive, so every session sees the
    same in-memory database for the duration of the test.
    """
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session on the test database."""
    session_factory = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def app(db_session: AsyncSession, test_settings: Settings) -> FastAPI:
    """Create the app with the session and settings dependencies overridden."""
    get_settings.cache_clear()

    from api.main import create_app
    from db.session import get_async_session

    application = create_app(test_settings)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    def override_get_settings() -> Settings:
        return test_settings

    application.dependency_overrides[get_async_session] = override_get_async_session
    application.dependency_overrides[get_settings] = override_get_settings
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create a test client that sends the configured bearer token."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {TEST_API_TOKEN}"},
    ) as test_client:
        yield test_client


@pytest.fixture
async def anonymous_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create a test client without an Authorization header."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client
