"""Service test fixtures - async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test database
    - failing_client routes every request to a session whose statements all fail

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one database
    - The app is built per test with create_app(); lifespan never runs, so no
      real database is touched
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from album_catalog.config import Settings
from album_catalog.db.base import Base
from album_catalog.infrastructure.database import get_db
from album_catalog.main import create_app
import album_catalog.models  # noqa: F401
from tests.services.fake_storage import FailingSession


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        app_mode="testing",
        database_url="sqlite+aiosqlite:///:memory:",
        log_format="text",
    )


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
async def client(app, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def failing_session():
    return FailingSession()


@pytest.fixture
async def failing_client(app, failing_session):
    """Client whose storage fails on every statement."""
    async def override_get_db():
        yield failing_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def album_payload():
    return {"title": "test album", "artist": "test artist", "price": 11.22}
