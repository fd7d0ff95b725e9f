"""Pytest configuration and fixtures."""

import asyncio
from typing import AsyncGenerator, Callable

import pytest
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from ideahub.app.core.security import issue_identity_token
from ideahub.app.db.base import Base, get_db, get_session_factory
from ideahub.app.main import app


def _identity_headers(
    uid: str,
    email: str | None = None,
    email_verified: bool = True,
    name: str | None = None,
) -> dict[str, str]:
    token = issue_identity_token(
        uid,
        email=email if email is not None else f"{uid}@example.com",
        email_verified=email_verified,
        name=name,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    """
    Build Authorization headers for a caller.

    Usage: ``auth_headers("alice", name="Alice")``. The email defaults to
    ``<uid>@example.com`` and is marked verified unless told otherwise.
    """
    return _identity_headers


@pytest.fixture(scope="function")
async def test_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a test database session.

    Each test gets a fresh database with all tables created.
    """
    # Use in-memory SQLite for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Provide session to test
    async with async_session() as session:
        yield session

    # Cleanup
    await engine.dispose()


@pytest.fixture(scope="function")
async def test_client_with_db() -> AsyncGenerator[AsyncClient, None]:
    """
    Create test client with in-memory database.

    This fixture creates a fresh test database for each test and
    overrides the app's database dependency.
    """
    # Create test database engine
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    # Create all tables
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    TestSessionLocal = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Override get_db dependency
    async def override_get_db():
        async with TestSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Create test client
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Cleanup
    app.dependency_overrides.clear()
    await test_engine.dispose()


@pytest.fixture(scope="function")
def test_client(tmp_path) -> TestClient:
    """
    Synchronous test client for WebSocket tests.

    The TestClient runs each request on its own event loop, so the database
    is a temporary file and connections are never pooled across loops.
    """
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'ideahub-test.db'}",
        echo=False,
        poolclass=NullPool,
    )

    async def create_tables():
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_tables())

    TestSessionLocal = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db():
        async with TestSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestSessionLocal

    # Not entered as a context manager: the app lifespan would touch the real database
    yield TestClient(app)

    app.dependency_overrides.clear()
    asyncio.run(test_engine.dispose())


@pytest.fixture
def idea_payload() -> Callable[..., dict]:
    """Build a valid idea creation payload for an author."""

    def build(author_id: str = "alice", **overrides) -> dict:
        payload = {
            "title": "Solar Backpack",
            "description": "A backpack with solar panels that charges your phone",
            "category": "product-idea",
            "author_id": author_id,
            "author_name": author_id.capitalize(),
            "author_email": f"{author_id}@example.com",
            "tags": ["solar", "outdoors"],
        }
        payload.update(overrides)
        return payload

    return build
