"""Password hashing and session cookie signing."""
from datetime import datetime, timedelta, timezone
import secrets

import jwt
from passlib.context import CryptContext

from .config import get_settings

SESSION_TOKEN_BYTES = 32
COOKIE_ALGORITHM = "HS256"

# Use PBKDF2-SHA256 instead of bcrypt to avoid bcrypt backend issues
password_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return password_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against the stored hash."""
    try:
        return password_context.verify(password, password_hash)
    except ValueError:
        # Stored value is not a hash this context recognises
        return False


def new_session_token() -> str:
    """Return a fresh opaque session identifier."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def sign_session_token(token: str, expires_at: datetime) -> str:
    """Wrap a session identifier in a signed cookie value."""

    settings = get_settings()
    payload = {
        "sid": token,
        "iat": int(datetime.now(timezone.utc).timestamp()),
        "exp": int(expires_at.replace(tzinfo=timezone.utc).timestamp()),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=COOKIE_ALGORITHM)


def read_session_token(cookie_value: str | None) -> str | None:
    """Return the session identifier from a cookie, or None if it is not trustworthy."""

    if not cookie_value:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(cookie_value, settings.secret_key, algorithms=[COOKIE_ALGORITHM])
    except jwt.PyJWTError:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) else None


def compute_expiry(minutes: int) -> datetime:
    """Return a naive UTC expiration timestamp for session rows."""

    return datetime.utcnow() + timedelta(minutes=minutes)
