"""Pydantic schemas used by the auth endpoint."""
import html
import re
from typing import Any, Literal

from pydantic import BaseModel, field_validator

MOBILE_PATTERN = re.compile(r"^01[0-9]{9}$")
MIN_PASSWORD_LENGTH = 6
ESCAPED_CHAR = re.compile(r"\\(.?)", re.DOTALL)


def strip_slashes(text: str) -> str:
    """Undo backslash quoting: ``\\\\`` becomes ``\\``, ``\\0`` a NUL, any other ``\\x`` becomes ``x``."""

    return ESCAPED_CHAR.sub(lambda m: "\0" if m.group(1) == "0" else m.group(1), text)


def sanitize_input(value: Any) -> str:
    """Trim, unquote backslashes and HTML-escape a free-text form value.

    Quotes are written as ``&quot;`` and ``&#039;`` so stored values match
    rows created by the earlier PHP frontend.
    """

    if value is None:
        return ""
    text = strip_slashes(str(value).strip())
    return html.escape(text, quote=True).replace("&#x27;", "&#039;")


class Envelope(BaseModel):
    """Uniform response body for every auth action."""

    status: Literal["success", "error"]
    message: str
    data: dict[str, Any] | None = None


class LoginForm(BaseModel):
    """Credentials posted to ``action=login``."""

    mobile: str = ""
    password: str = ""
    user_type: str = ""

    @field_validator("mobile", "user_type", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> str:
        return sanitize_input(value)

    @field_validator("password", mode="before")
    @classmethod
    def _raw_password(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def is_complete(self) -> bool:
        return bool(self.mobile and self.password and self.user_type)


class RegisterForm(BaseModel):
    """Account details posted to ``action=register``."""

    user_type: str = ""
    name: str = ""
    mobile: str = ""
    password: str = ""
    email: str = ""
    division: str = ""
    district: str = ""
    upazila: str = ""
    address: str = ""

    @field_validator(
        "user_type",
        "name",
        "mobile",
        "email",
        "division",
        "district",
        "upazila",
        "address",
        mode="before",
    )
    @classmethod
    def _sanitize(cls, value: Any) -> str:
        return sanitize_input(value)

    @field_validator("password", mode="before")
    @classmethod
    def _raw_password(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def is_complete(self) -> bool:
        return bool(self.user_type and self.name and self.mobile and self.password)

    def has_valid_mobile(self) -> bool:
        return MOBILE_PATTERN.fullmatch(self.mobile) is not None

    def has_valid_password(self) -> bool:
        return len(self.password) >= MIN_PASSWORD_LENGTH


class LoginData(BaseModel):
    """Identity returned after a successful login."""

    id: int
    user_type: str
    name: str
    mobile: str
    division: str
    district: str
    upazila: str

    class Config:
        from_attributes = True


class SessionData(BaseModel):
    """Identity reported by ``action=check_session``."""

    id: int
    user_type: str
    name: str
    mobile: str
