"""Tests for the database-backed SessionStore."""
from datetime import datetime, timedelta

import pytest

from fishcare.models import User, UserSession
from fishcare.security import hash_password
from fishcare.sessions import SessionStore


async def make_user(db_session) -> User:
    user = User(
        user_type="farmer",
        name="Karim",
        mobile="01712345678",
        password=hash_password("secret1"),
        division="Dhaka",
        district="Gazipur",
        upazila="Kaliakair",
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.mark.asyncio
async def test_create_copies_identity(db_session) -> None:
    user = await make_user(db_session)
    store = SessionStore(db_session, lifetime_minutes=30)

    row = await store.create(user)
    await db_session.commit()

    loaded = await store.load(row.token)
    assert loaded is not None
    assert (loaded.user_id, loaded.user_type, loaded.name, loaded.mobile) == (
        user.id,
        "farmer",
        "Karim",
        "01712345678",
    )
    assert (loaded.division, loaded.district, loaded.upazila) == ("Dhaka", "Gazipur", "Kaliakair")
    assert loaded.expires_at > datetime.utcnow() + timedelta(minutes=29)


@pytest.mark.asyncio
async def test_load_unknown_or_empty_token(db_session) -> None:
    store = SessionStore(db_session, lifetime_minutes=30)
    assert await store.load(None) is None
    assert await store.load("missing") is None


@pytest.mark.asyncio
async def test_destroy_is_idempotent(db_session) -> None:
    user = await make_user(db_session)
    store = SessionStore(db_session, lifetime_minutes=30)
    row = await store.create(user)
    await db_session.commit()
    token = row.token

    await store.destroy(token)
    await store.destroy(token)
    await store.destroy(None)
    await db_session.commit()

    db_session.expunge_all()
    assert await db_session.get(UserSession, token) is None


@pytest.mark.asyncio
async def test_zero_lifetime_session_is_already_expired(db_session) -> None:
    user = await make_user(db_session)
    store = SessionStore(db_session, lifetime_minutes=0)
    row = await store.create(user)
    await db_session.commit()
    token = row.token

    assert await store.load(token) is None
    db_session.expunge_all()
    assert await db_session.get(UserSession, token) is None
