"""
Palette Backend: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the test suite.
How:   Environment is overridden BEFORE any palette import so the engine
       is created against a throwaway SQLite file, never a real database.

Fixtures:
    ├── mock_db_session:  AsyncMock session for service-level tests
    ├── make_rows:        builds ORM-like rows (id/hex/name attributes)
    ├── db_tables:        creates/drops the real schema on the SQLite file
    ├── test_client:      HTTPX AsyncClient against the FastAPI app
    └── mocked_db_client: test_client whose DB session is a mock
"""

import os
import tempfile
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

# Must happen before palette.config is imported anywhere
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="palette_test_"), "test.db")
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "*"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.return_value = result_with_rows(...)
        await color_service.list_colors(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_rows():
    """Factory: make_rows(("id1", "#FF0000", "red"), ...) → query result mock."""

    def _make(*triples):
        rows = [SimpleNamespace(id=i, hex=h, name=n) for i, h, n in triples]
        result = MagicMock()
        result.scalars.return_value.all.return_value = rows
        return result

    return _make


@pytest.fixture
def count_result():
    """Factory: count_result(n) → mock whose .scalar() returns n."""

    def _make(n):
        result = MagicMock()
        result.scalar.return_value = n
        return result

    return _make


@pytest_asyncio.fixture
async def db_tables():
    """Create the schema on the test SQLite file; drop it afterwards."""
    from palette.database import Base, engine
    from palette.models.color import Color  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Pooled connections are bound to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server, no
    lifespan, so no startup database ping).
    """
    from palette.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mocked_db_client(mock_db_session):
    """test_client whose get_db_session dependency yields mock_db_session."""
    from palette.database import get_db_session
    from palette.main import app

    async def _override():
        yield mock_db_session

    app.dependency_overrides[get_db_session] = _override
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_db_session, None)
