"""
Pytest configuration for TaskForge backend tests.

Every test gets a fresh in-memory SQLite database (foreign keys enforced)
and an in-memory Redis stand-in, wired into the app through
``dependency_overrides``.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

import time
from collections.abc import AsyncGenerator
from typing import Any

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import taskforge.models  # noqa: F401
from taskforge.core.database import get_db
from taskforge.core.dependencies import get_redis
from taskforge.core.security import create_access_token
from taskforge.main import app
from taskforge.models.base import Base
from taskforge.models.priority import Priority
from taskforge.models.status import Status
from taskforge.models.user import User
from taskforge.services.user_service import UserService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "password123"


class FakeRedis:
    """Dict-backed subset of the redis.asyncio client used by the app."""

    def __init__(self) -> None:
        self.store: dict[str, tuple[str, float | None]] = {}

    def _alive(self, key: str) -> bool:
        entry = self.store.get(key)
        if entry is None:
            return False
        expires_at = entry[1]
        if expires_at is not None and expires_at <= time.monotonic():
            del self.store[key]
            return False
        return True

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        self.store[key] = (value, time.monotonic() + ttl)
        return True

    async def get(self, key: str) -> str | None:
        return self.store[key][0] if self._alive(key) else None

    async def exists(self, *keys: str) -> int:
        return sum(1 for key in keys if self._alive(key))

    async def delete(self, *keys: str) -> int:
        return sum(1 for key in keys if self.store.pop(key, None) is not None)

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        self.store.clear()


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database engine for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest_asyncio.fixture
async def client(session_maker, fake_redis) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with DB and Redis overridden."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_get_redis() -> FakeRedis:
        return fake_redis

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = override_get_redis

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Users and tokens
# ---------------------------------------------------------------------------

async def make_user(
    session_maker: async_sessionmaker[AsyncSession],
    email: str,
    name: str | None = "Test User",
    is_admin: bool = False,
) -> User:
    async with session_maker() as session:
        user = await UserService(session).create(
            email=email, password=TEST_PASSWORD, name=name, is_admin=is_admin
        )
        await session.commit()
    return user


def auth_headers(user: User) -> dict[str, str]:
    token, _ = create_access_token(str(user.id), user.name)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def user(session_maker) -> User:
    return await make_user(session_maker, "alice@example.com", "Alice")


@pytest_asyncio.fixture
async def other_user(session_maker) -> User:
    return await make_user(session_maker, "bob@example.com", "Bob")


@pytest_asyncio.fixture
async def admin(session_maker) -> User:
    return await make_user(session_maker, "admin@example.com", "Admin", is_admin=True)


@pytest_asyncio.fixture
async def user_headers(user) -> dict[str, str]:
    return auth_headers(user)


@pytest_asyncio.fixture
async def other_headers(other_user) -> dict[str, str]:
    return auth_headers(other_user)


@pytest_asyncio.fixture
async def admin_headers(admin) -> dict[str, str]:
    return auth_headers(admin)


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def status_row(session_maker) -> Status:
    async with session_maker() as session:
        row = Status(name="Todo")
        session.add(row)
        await session.commit()
    return row


@pytest_asyncio.fixture
async def priority_row(session_maker) -> Priority:
    async with session_maker() as session:
        row = Priority(name="High")
        session.add(row)
        await session.commit()
    return row


@pytest_asyncio.fixture
async def create_user(session_maker):
    """Factory fixture: ``await create_user(email, name=..., is_admin=...)``."""

    async def _create(email: str, name: str | None = "Test User", is_admin: bool = False) -> User:
        return await make_user(session_maker, email, name, is_admin)

    return _create


@pytest_asyncio.fixture
async def headers_for():
    return auth_headers
