"""Async engine and per-request sessions for the user and session tables."""
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import Settings, get_settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the engine for ``settings.database_url``."""

    if settings.database_url.startswith("sqlite+"):
        return create_async_engine(
            settings.database_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )
    # Server databases drop idle connections
    return create_async_engine(settings.database_url, echo=False, pool_pre_ping=True)


engine = build_engine(get_settings())
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async SQLAlchemy session per request."""

    async with AsyncSessionLocal() as session:
        yield session
