"""Root test fixtures shared across all test types.

Tests run against an in-memory SQLite database (aiosqlite) and fakeredis,
so no external services are needed.
"""

import os

# Must be set before any app imports - Settings() is read at import time
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-0123456789abcdef0123456789")
os.environ.setdefault("DATABASE_SSL_MODE", "disable")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
from fakeredis import aioredis as fakeredis_aio
from httpx import ASGITransport, AsyncClient
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.catalog.api.dependencies import get_db_session
from src.catalog.core import cache as cache_core
from src.catalog.core.config import get_settings
from src.catalog.core.security import create_access_token
from src.catalog.main import create_app
from src.catalog.models import Project, User  # noqa: F401 - registers the tables
from src.catalog.repositories import ProjectRepository, UserRepository
from src.catalog.services.project_service import ProjectService
from src.catalog.services.user_service import UserService

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


# --- Database Fixtures ---


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine with the schema created from model metadata.

    StaticPool keeps one connection so every session sees the same database.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session; tests must commit explicitly."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def project_repo(db_session: AsyncSession) -> ProjectRepository:
    return ProjectRepository(db_session)


@pytest.fixture
def project_service(project_repo: ProjectRepository, db_session: AsyncSession) -> ProjectService:
    return ProjectService(project_repo, db_session)


@pytest.fixture
def user_repo(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def user_service(user_repo: UserRepository, db_session: AsyncSession) -> UserService:
    return UserService(user_repo, db_session)


# --- Redis Test Fixtures (shared) ---


@pytest.fixture(autouse=True)
def _reset_redis_state() -> None:
    """Forget any Redis client between tests (clients are bound to an event loop)."""
    cache_core.reset_redis_state()
    yield
    cache_core.reset_redis_state()


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """Provides an in-memory fakeredis client."""
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Redis]:
    """Patches get_redis() to return the fakeredis client."""

    async def _get_fake_redis() -> Redis:
        return fake_redis

    monkeypatch.setattr("src.catalog.core.cache.get_redis", _get_fake_redis)
    yield fake_redis


@pytest.fixture
async def mock_redis_unavailable(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[None]:
    """Patches get_redis() to return None (simulates Redis unavailable)."""

    async def _get_none() -> None:
        return None

    monkeypatch.setattr("src.catalog.core.cache.get_redis", _get_none)
    yield


# --- API Fixtures ---


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the app, with request sessions bound to the test engine."""
    app = create_app()

    async def _get_test_session() -> AsyncGenerator[AsyncSession]:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_db_session] = _get_test_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('user-1')}"}
