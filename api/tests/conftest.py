"""
Shared test fixtures for the profiles API tests.

Provides database session management, the test client, and user fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.middleware.rate_limit import reset_limiter

# Import models so they're registered with Base.metadata before table creation
from app.models.profile import Profile
from app.models.user import User
from app.actions import CreateUserAction

# Test database URL (in-memory SQLite unless TEST_DATABASE_URL is set)
TEST_DATABASE_URL = settings.test_database_url


def _create_test_engine() -> AsyncEngine:
    if not TEST_DATABASE_URL.startswith("sqlite"):
        return create_async_engine(TEST_DATABASE_URL, poolclass=NullPool, echo=False)

    # One shared connection so the in-memory database survives across sessions
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):  # noqa: ARG001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


# --- Isolation Fixtures ---


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Reset rate limiter before each test to ensure test isolation."""
    reset_limiter()
    yield


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Use the minimum bcrypt cost so tests don't spend time hashing."""
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)


# --- Database Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create tables before each test function, drop after.
    Provides isolated database state per test.
    """
    engine = _create_test_engine()
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

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client configured for testing.
    Overrides database dependency with test session.

    App exceptions are not re-raised so 500 responses can be asserted on.
    """

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        follow_redirects=True,
    ) as client:
        yield client

    app.dependency_overrides.clear()


# --- Payload Fixtures ---


@pytest.fixture
def valid_user_data() -> dict[str, Any]:
    """Valid user creation payload."""
    return {
        "name": "John Doe",
        "email": "john@example.com",
        "password": "password123",
        "profile_data": {
            "bio": "Software developer",
            "location": "New York",
        },
    }


# --- Query Helper Fixtures ---


@pytest.fixture
def fetch_user(db_session: AsyncSession):
    """Factory fixture loading a user by email, bypassing the identity map cache."""

    async def _fetch_user(email: str) -> User | None:
        result = await db_session.execute(
            select(User)
            .where(User.email == email)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    return _fetch_user


@pytest.fixture
def fetch_profile(db_session: AsyncSession):
    """Factory fixture loading the profile of a user id."""

    async def _fetch_profile(user_id: UUID | str) -> Profile | None:
        if isinstance(user_id, str):
            user_id = UUID(user_id)
        result = await db_session.execute(
            select(Profile)
            .where(Profile.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    return _fetch_profile


@pytest.fixture
def count_users(db_session: AsyncSession):
    """Factory fixture counting users holding an email."""

    async def _count_users(email: str) -> int:
        result = await db_session.execute(select(User.id).where(User.email == email))
        return len(result.all())

    return _count_users


# --- User Fixtures ---


async def _create_user(
    db_session: AsyncSession,
    name: str,
    email: str,
    password: str,
    bio: str,
    location: str,
) -> dict[str, Any]:
    """Helper to create a user and profile through the create action."""
    result = await CreateUserAction(db_session).handle(
        {
            "name": name,
            "email": email,
            "password": password,
            "profile_data": {"bio": bio, "location": location},
        }
    )
    return {
        "user_id": str(result.user.id),
        "profile_id": str(result.profile.id),
        "name": result.user.name,
        "email": result.user.email,
        "password": password,
        "bio": result.profile.bio,
        "location": result.profile.location,
    }


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> dict[str, Any]:
    """Create a standard test user with a profile."""
    return await _create_user(
        db_session,
        name="Test User",
        email="test@example.com",
        password="TestPassword123!",
        bio="Writes tests",
        location="Berlin",
    )


@pytest_asyncio.fixture
async def second_user(db_session: AsyncSession) -> dict[str, Any]:
    """Create a second user for uniqueness scenarios."""
    return await _create_user(
        db_session,
        name="Second User",
        email="second@example.com",
        password="SecondPassword123!",
        bio="Reviews tests",
        location="Lisbon",
    )
