"""Root conftest: test infrastructure for all backend tests.

Provides:
- SQLite-backed db_session fixture (fresh database file per test)
- Event and repository seeding helpers
- API client with dependency overrides
- Autouse reset of the shared GitHub HTTP client
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from app.models import Event, Repository, User  # noqa: F401

# ─────────────────────────────────────────────────────────────────────────────
# Database (SQLite file per test)
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
async def db_engine(tmp_path: Path):
    """Async engine on a throwaway SQLite database with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'signalkit_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncIterator[AsyncSession]:
    """Session on the throwaway database; tests may flush and commit freely."""
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


# ─────────────────────────────────────────────────────────────────────────────
# API Client
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
async def api_client(db_session: AsyncSession):
    """HTTP client running the app in-process against the throwaway database.

    Overrides: get_db
    """
    from app.core.database import get_db
    from app.main import app

    async def override_db():
        yield db_session
        await db_session.commit()

    app.dependency_overrides[get_db] = override_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ─────────────────────────────────────────────────────────────────────────────
# External Service Safety
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_github_client():
    """Drop the shared GitHub client so no test reuses another's (mocked) client."""
    import app.services.github.http_client as mod

    original = mod._client
    mod._client = None
    yield
    mod._client = original
