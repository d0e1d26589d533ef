"""
Pytest configuration and fixtures for API and service tests.

This module provides:
- An in-memory SQLite database per test (aiosqlite, schema from SQLModel metadata)
- Test session management
- FastAPI test client with dependency overrides
- Factory fixtures for creating test data
"""

import uuid
from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library.database import enable_sqlite_foreign_keys, get_session
from course_library.main import app
from course_library.models import Author, Course

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# =============================================================================
# Function-scoped fixtures (fresh for each test)
# =============================================================================


@pytest.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create an async engine on a private in-memory SQLite database.

    StaticPool keeps a single connection so every session sees the same
    in-memory database; the schema is created from the SQLModel metadata.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,  # Set to True for SQL query debugging
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for a single test."""
    session = AsyncSession(
        bind=test_engine,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=True,
    )

    try:
        yield session
    finally:
        await session.close()


@pytest.fixture
async def client(test_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide an async HTTP client for testing FastAPI endpoints.

    The session dependency is overridden so API calls and direct database
    checks in a test share one session.
    """

    async def override_get_session():
        yield test_session

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clear dependency overrides after test
    app.dependency_overrides.clear()


# =============================================================================
# Factory fixtures for creating test data
# =============================================================================


@pytest.fixture
async def author_factory(test_session: AsyncSession):
    """
    Factory fixture for creating Author instances in the test database.

    Usage:
        author = await author_factory(first_name="Nancy", main_category="Rum")
    """

    async def _create_author(**kwargs) -> Author:
        defaults = {
            "id": uuid.uuid4(),
            "first_name": "Berry",
            "last_name": "Griffin Beak Eldritch",
            "date_of_birth": datetime(1650, 7, 23, tzinfo=timezone.utc),
            "main_category": "Ships",
        }
        defaults.update(kwargs)

        author = Author(**defaults)
        test_session.add(author)
        await test_session.commit()
        await test_session.refresh(author)
        return author

    return _create_author


@pytest.fixture
async def course_factory(test_session: AsyncSession):
    """
    Factory fixture for creating Course instances in the test database.

    Usage:
        course = await course_factory(author_id=author.id, title="Singalong Pirate Hits")
    """

    async def _create_course(author_id: uuid.UUID, **kwargs) -> Course:
        defaults = {
            "id": uuid.uuid4(),
            "title": "Commandeering a Ship Without Getting Caught",
            "description": "Commandeering a ship in rough waters isn't easy.",
        }
        defaults.update(kwargs)

        course = Course(author_id=author_id, **defaults)
        test_session.add(course)
        await test_session.commit()
        await test_session.refresh(course)
        return course

    return _create_course
