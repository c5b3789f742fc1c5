"""Test fixtures for the backend."""
import os
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_fishcare.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length")
os.environ.setdefault("LOCALE", "bn")

from fishcare import models  # noqa: E402
from fishcare.database import AsyncSessionLocal, engine  # noqa: E402
from fishcare.main import app  # noqa: E402


test_db_path = Path("test_fishcare.db")


@pytest_asyncio.fixture
async def prepare_database():
    """Give a test an empty schema and remove the database file afterwards."""

    async with engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.drop_all)
        await conn.run_sync(models.Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.drop_all)
    await engine.dispose()
    if test_db_path.exists():
        test_db_path.unlink()


@pytest_asyncio.fixture
async def client(prepare_database) -> AsyncClient:
    """Provide an HTTP client that keeps cookies between requests."""

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture
async def db_session(prepare_database):
    """Direct ORM access for arranging and inspecting rows."""

    async with AsyncSessionLocal() as session:
        yield session
