"""Pytest configuration and shared fixtures.

Settings are validated at import time, so the test environment is pinned here
before any ``app`` module is imported. Integration tests run against SQLite
(``aiosqlite``) unless ``TEST_DATABASE_URL`` points at another database.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path


def _get_test_database_url() -> str:
    """Resolve the test database URL from env or a throwaway SQLite file."""
    env_url = os.getenv("TEST_DATABASE_URL")
    if env_url:
        return env_url
    db_path = Path(tempfile.gettempdir()) / f"rehab_catalog_test_{os.getpid()}.db"
    return f"sqlite+aiosqlite:///{db_path}"


os.environ["DATABASE_URL"] = _get_test_database_url()
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.db.seed import seed_database  # noqa: E402
from app.db.session import get_engine, get_session_maker  # noqa: E402
from app.main import create_app  # noqa: E402

# Async fixtures (function-scoped; every test gets fresh tables).


@pytest_asyncio.fixture
async def db_engine() -> AsyncIterator[AsyncEngine]:
    """Recreates the schema on the app's engine and disposes the pool afterwards."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    # Pooled connections are bound to this test's event loop.
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Creates a database session for a test (function-scoped)."""
    async with get_session_maker()() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_session(db_session: AsyncSession) -> AsyncSession:
    """Session over the five sample records (2025-01-01 .. 2025-01-20)."""
    await seed_database(db_session)
    return db_session


@pytest.fixture
def app() -> FastAPI:
    """Creates a FastAPI app (lifespan DB check is skipped in the test environment)."""
    return create_app()


@pytest_asyncio.fixture
async def async_http_client(app: FastAPI, db_engine: AsyncEngine) -> AsyncIterator[AsyncClient]:
    """Creates an async http client bound to the app through ASGI."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


# Synchronous fixtures (for tests that don't need database access)


@pytest.fixture
def http_client(app: FastAPI) -> TestClient:
    """Creates a synchronous http client."""
    return TestClient(app)
