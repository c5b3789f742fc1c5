"""Authentication endpoint: login, register, logout and check_session."""
from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from .config import get_settings
from .dependencies import get_db_session, get_session_store, get_session_token
from .messages import message
from .models import User
from .schemas import Envelope, LoginData, LoginForm, RegisterForm, SessionData
from .security import hash_password, sign_session_token, verify_password
from .sessions import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

JSON_UTF8 = "application/json; charset=utf-8"


class Action(str, Enum):
    LOGIN = "login"
    REGISTER = "register"
    LOGOUT = "logout"
    CHECK_SESSION = "check_session"


class AuthError(Exception):
    """Expected failure reported to the client as an error envelope."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key


@dataclass
class AuthContext:
    """Everything an action handler may touch for one request."""

    method: str
    form: Mapping[str, Any]
    db: AsyncSession
    sessions: SessionStore
    token: str | None


@dataclass
class AuthOutcome:
    envelope: Envelope
    issue_token: tuple[str, datetime] | None = None
    clear_cookie: bool = False


def success(key: str, data: dict[str, Any] | None = None) -> Envelope:
    return Envelope(status="success", message=message(key), data=data)


def failure(text: str) -> Envelope:
    return Envelope(status="error", message=text, data=None)


def require_post(ctx: AuthContext) -> None:
    if ctx.method != "POST":
        raise AuthError("invalid_method")


async def login(ctx: AuthContext) -> AuthOutcome:
    """Verify mobile/password for a user type and open a session."""

    require_post(ctx)
    form = LoginForm.model_validate(dict(ctx.form))
    if not form.is_complete():
        raise AuthError("login_fields_required")

    result = await ctx.db.execute(
        select(User).where(User.mobile == form.mobile, User.user_type == form.user_type)
    )
    user = result.scalars().first()
    if user is None:
        logger.info("Login failed for %s: no %s account", form.mobile, form.user_type)
        raise AuthError("bad_credentials")
    if not user.is_active:
        logger.info("Login refused for %s: status %r", form.mobile, user.status)
        raise AuthError("account_inactive")
    if not verify_password(form.password, user.password):
        logger.info("Login failed for %s: wrong password", form.mobile)
        raise AuthError("bad_credentials")

    # A fresh token on every login; never reuse the one the client arrived with
    await ctx.sessions.destroy(ctx.token)
    session_row = await ctx.sessions.create(user)
    await ctx.db.commit()

    logger.info("User %s (%s) logged in", user.id, user.user_type)
    data = LoginData.model_validate(user).model_dump()
    return AuthOutcome(
        envelope=success("login_success", data),
        issue_token=(session_row.token, session_row.expires_at),
    )


async def mobile_taken(db: AsyncSession, mobile: str) -> bool:
    """Pre-insert duplicate check; the unique constraint on mobile is authoritative."""

    existing = await db.execute(select(User.id).where(User.mobile == mobile))
    return existing.first() is not None


async def register(ctx: AuthContext) -> AuthOutcome:
    """Create an account; the caller must log in afterwards."""

    require_post(ctx)
    form = RegisterForm.model_validate(dict(ctx.form))
    if not form.is_complete():
        raise AuthError("register_fields_required")
    if not form.has_valid_mobile():
        raise AuthError("invalid_mobile")
    if not form.has_valid_password():
        raise AuthError("short_password")

    if await mobile_taken(ctx.db, form.mobile):
        raise AuthError("duplicate_mobile")

    user = User(
        user_type=form.user_type,
        name=form.name,
        mobile=form.mobile,
        password=hash_password(form.password),
        email=form.email,
        division=form.division,
        district=form.district,
        upazila=form.upazila,
        address=form.address,
        status=get_settings().default_user_status,
    )
    ctx.db.add(user)
    try:
        await ctx.db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same mobile
        await ctx.db.rollback()
        logger.warning("Duplicate mobile %s rejected by unique constraint", form.mobile)
        raise AuthError("duplicate_mobile") from None

    if user.id is None:
        raise AuthError("register_failed")
    logger.info("Registered user %s (%s)", user.id, user.user_type)
    return AuthOutcome(envelope=success("register_success", {"user_id": user.id}))


async def logout(ctx: AuthContext) -> AuthOutcome:
    """Drop the current session, if any. Always succeeds."""

    if ctx.token:
        await ctx.sessions.destroy(ctx.token)
        await ctx.db.commit()
        logger.info("Session closed")
    return AuthOutcome(envelope=success("logout_success"), clear_cookie=True)


async def check_session(ctx: AuthContext) -> AuthOutcome:
    """Report who is logged in on this session."""

    row = await ctx.sessions.load(ctx.token)
    if row is None:
        return AuthOutcome(envelope=failure(message("no_session")))
    data = SessionData(
        id=row.user_id, user_type=row.user_type, name=row.name, mobile=row.mobile
    ).model_dump()
    return AuthOutcome(envelope=success("session_active", data))


ROUTES: dict[Action, Callable[[AuthContext], Awaitable[AuthOutcome]]] = {
    Action.LOGIN: login,
    Action.REGISTER: register,
    Action.LOGOUT: logout,
    Action.CHECK_SESSION: check_session,
}


def database_error_message(exc: SQLAlchemyError) -> str:
    base = message("database_error")
    if get_settings().expose_db_errors:
        return f"{base}: {exc}"
    return base


def render(outcome: AuthOutcome) -> JSONResponse:
    """Serialise an outcome, applying any cookie change it carries."""

    settings = get_settings()
    response = JSONResponse(content=outcome.envelope.model_dump(), media_type=JSON_UTF8)
    if outcome.issue_token is not None:
        token, expires_at = outcome.issue_token
        response.set_cookie(
            key=settings.session_cookie_name,
            value=sign_session_token(token, expires_at),
            max_age=settings.session_lifetime_minutes * 60,
            httponly=True,
            samesite="lax",
            secure=settings.session_cookie_secure,
        )
    elif outcome.clear_cookie:
        response.delete_cookie(
            key=settings.session_cookie_name,
            httponly=True,
            samesite="lax",
            secure=settings.session_cookie_secure,
        )
    return response


@router.api_route("/auth", methods=["GET", "POST"])
async def auth_endpoint(
    request: Request,
    action: str = Query(default=""),
    db: AsyncSession = Depends(get_db_session),
    sessions: SessionStore = Depends(get_session_store),
    token: str | None = Depends(get_session_token),
) -> JSONResponse:
    """Dispatch ``?action=`` to its handler. Always answers HTTP 200."""

    try:
        selected = Action(action)
    except ValueError:
        return render(AuthOutcome(envelope=failure(message("invalid_action"))))

    form: Mapping[str, Any] = {}
    if request.method == "POST" and selected in (Action.LOGIN, Action.REGISTER):
        try:
            form = await request.form()
        except (MultiPartException, StarletteHTTPException) as exc:
            logger.info("Unreadable %s body: %s", selected.value, exc)
            return render(AuthOutcome(envelope=failure(message("invalid_body"))))

    ctx = AuthContext(
        method=request.method, form=form, db=db, sessions=sessions, token=token
    )
    try:
        outcome = await ROUTES[selected](ctx)
    except AuthError as exc:
        outcome = AuthOutcome(envelope=failure(message(exc.key)))
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Database failure during %s", selected.value)
        outcome = AuthOutcome(envelope=failure(database_error_message(exc)))
    return render(outcome)
