"""Reusable FastAPI dependencies."""
from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .config import get_settings
from .database import get_session
from .security import read_session_token
from .sessions import SessionStore

# Load settings once
settings = get_settings()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields an AsyncSession."""
    async for session in get_session():
        yield session


def get_session_token(request: Request) -> str | None:
    """Return the session identifier carried by the signed session cookie."""

    return read_session_token(request.cookies.get(settings.session_cookie_name))


def get_session_store(session: AsyncSession = Depends(get_db_session)) -> SessionStore:
    """Bind a SessionStore to the request's database session."""

    return SessionStore(session, settings.session_lifetime_minutes)
