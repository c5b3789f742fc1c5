"""Server-side session store backed by the ``user_sessions`` table."""
from __future__ import annotations

from datetime import datetime
import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from .models import User, UserSession
from .security import compute_expiry, new_session_token

logger = logging.getLogger(__name__)


class SessionStore:
    """Create, load and destroy login sessions within one database session.

    Methods stage changes on the database session; callers commit. ``load``
    is the exception: it commits the removal of an expired row itself.
    """

    def __init__(self, db: AsyncSession, lifetime_minutes: int) -> None:
        self._db = db
        self._lifetime_minutes = lifetime_minutes

    async def create(self, user: User) -> UserSession:
        """Stage a new session holding the user's identifying fields.

        Every session already past its expiry is purged in the same step.
        """

        await self.purge_expired()
        row = UserSession(
            token=new_session_token(),
            user_id=user.id,
            user_type=user.user_type,
            name=user.name,
            mobile=user.mobile,
            division=user.division,
            district=user.district,
            upazila=user.upazila,
            expires_at=compute_expiry(self._lifetime_minutes),
        )
        self._db.add(row)
        await self._db.flush()
        return row

    async def purge_expired(self) -> None:
        """Stage removal of every session past its expiry."""

        await self._db.execute(
            delete(UserSession).where(UserSession.expires_at <= datetime.utcnow())
        )

    async def load(self, token: str | None) -> UserSession | None:
        """Return the live session for ``token``; expired rows are purged."""

        if not token:
            return None
        row = await self._db.get(UserSession, token)
        if row is None:
            return None
        if row.expires_at <= datetime.utcnow():
            logger.info("Session for user %s expired", row.user_id)
            await self._db.delete(row)
            await self._db.commit()
            return None
        return row

    async def destroy(self, token: str | None) -> None:
        """Stage removal of the session for ``token`` if there is one."""

        if not token:
            return
        await self._db.execute(delete(UserSession).where(UserSession.token == token))
