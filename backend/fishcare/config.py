"""Application settings and configuration helpers."""
from functools import lru_cache
import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    """Runtime configuration loaded from environment variables."""

    database_url: str = Field(
        default="sqlite+aiosqlite:///./fishcare.db", alias="DATABASE_URL"
    )
    secret_key: str = Field(default="change-me", alias="SECRET_KEY")
    session_cookie_name: str = Field(default="FISHCARE_SESSION", alias="SESSION_COOKIE_NAME")
    session_lifetime_minutes: int = Field(default=60 * 24, alias="SESSION_LIFETIME_MINUTES")
    session_cookie_secure: bool = Field(default=False, alias="SESSION_COOKIE_SECURE")
    default_user_status: str = Field(default="active", alias="DEFAULT_USER_STATUS")
    expose_db_errors: bool = Field(default=False, alias="EXPOSE_DB_ERRORS")
    locale: str = Field(default="bn", alias="LOCALE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance; pydantic coerces the raw strings."""

    defaults = Settings.model_fields
    return Settings(
        database_url=os.getenv("DATABASE_URL", defaults["database_url"].default),
        secret_key=os.getenv("SECRET_KEY", defaults["secret_key"].default),
        session_cookie_name=os.getenv(
            "SESSION_COOKIE_NAME", defaults["session_cookie_name"].default
        ),
        session_lifetime_minutes=os.getenv(
            "SESSION_LIFETIME_MINUTES", defaults["session_lifetime_minutes"].default
        ),
        session_cookie_secure=os.getenv(
            "SESSION_COOKIE_SECURE", defaults["session_cookie_secure"].default
        ),
        default_user_status=os.getenv(
            "DEFAULT_USER_STATUS", defaults["default_user_status"].default
        ),
        expose_db_errors=os.getenv("EXPOSE_DB_ERRORS", defaults["expose_db_errors"].default),
        locale=os.getenv("LOCALE", defaults["locale"].default),
        log_level=os.getenv("LOG_LEVEL", defaults["log_level"].default),
    )
