"""
Shared test fixtures for XXML CMS API tests.

Provides database session management, test clients, and user fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from xxml_cms.auth.api_key import create_api_key
from xxml_cms.config import settings
from xxml_cms.database import Base, get_db
from xxml_cms.dependencies import get_revalidator
from xxml_cms.main import app
from xxml_cms.middleware.rate_limit import reset_limiter

# Import models so they're registered with Base.metadata before table creation
from xxml_cms.models import Category, User
from xxml_cms.services.cache import PathRevalidator

TEST_DATABASE_URL = settings.test_database_url


# --- Rate Limiter Reset Fixture ---


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Reset rate limiter before each test to ensure test isolation."""
    reset_limiter()
    yield


# --- Database Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Fresh in-memory database per test function.

    StaticPool keeps the single SQLite connection alive for the whole test.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def revalidator() -> PathRevalidator:
    return PathRevalidator()


@pytest_asyncio.fixture(scope="function")
async def async_client(
    db_session: AsyncSession, revalidator: PathRevalidator
) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client configured for testing.
    Overrides database dependency with test session.
    """

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_revalidator] = lambda: revalidator

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        follow_redirects=True,
    ) as client:
        yield client

    app.dependency_overrides.clear()


# --- Authentication Helper Fixtures ---


@pytest.fixture
def auth_headers():
    """Factory fixture for creating X-API-Key headers."""

    def _auth_headers(api_key: str) -> dict[str, str]:
        return {"X-API-Key": api_key}

    return _auth_headers


# --- User Fixtures ---


async def _create_user(db_session: AsyncSession, username: str, role: str) -> dict[str, Any]:
    """Helper to create a user with a role and API key in the database."""
    user = User(
        username=username,
        email=f"{username}@example.com",
        display_name=username.title(),
        role=role,
    )
    db_session.add(user)
    await db_session.flush()
    api_key = await create_api_key(db_session, user, name="Test key")
    await db_session.commit()

    return {
        "user": user,
        "user_id": user.id,
        "username": user.username,
        "api_key": api_key,
        "role": role,
    }


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> dict[str, Any]:
    """A plain USER with an API key."""
    return await _create_user(db_session, "testuser", "USER")


@pytest_asyncio.fixture
async def second_user(db_session: AsyncSession) -> dict[str, Any]:
    """Create a second user for testing ownership/authorization scenarios."""
    return await _create_user(db_session, "seconduser", "USER")


@pytest_asyncio.fixture
async def test_developer(db_session: AsyncSession) -> dict[str, Any]:
    return await _create_user(db_session, "devuser", "DEVELOPER")


@pytest_asyncio.fixture
async def test_moderator(db_session: AsyncSession) -> dict[str, Any]:
    return await _create_user(db_session, "moduser", "MODERATOR")


@pytest_asyncio.fixture
async def test_admin(db_session: AsyncSession) -> dict[str, Any]:
    return await _create_user(db_session, "adminuser", "ADMIN")


# --- Content Fixtures ---


@pytest_asyncio.fixture
async def category(db_session: AsyncSession) -> Category:
    """The general discussion category."""
    category = Category(
        name="General Discussion",
        slug="general",
        description="General discussions about XXML programming",
        sort_order=1,
    )
    db_session.add(category)
    await db_session.commit()
    return category


@pytest.fixture
def long_body() -> str:
    """A post body that passes the minimum length check."""
    return "XXML ownership semantics explained in detail."


@pytest.fixture
def frozen_time():
    """
    Fixture for time-based testing using freezegun.

    Usage:
        with frozen_time("2026-02-01 12:00:00"):
            # time is frozen
    """
    from freezegun import freeze_time

    return freeze_time
