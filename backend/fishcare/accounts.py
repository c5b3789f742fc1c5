"""Account maintenance helpers used by operator scripts."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import User


async def set_status(
    session: AsyncSession, mobile: str, status: str, user_type: str | None = None
) -> list[User]:
    """Update every account matching ``mobile`` (and ``user_type`` if given)."""

    query = select(User).where(User.mobile == mobile)
    if user_type:
        query = query.where(User.user_type == user_type)
    users = list((await session.execute(query)).scalars().all())
    for user in users:
        user.status = status
    await session.commit()
    return users
