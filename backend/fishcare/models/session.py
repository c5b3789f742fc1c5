"""Server-side login sessions keyed by an opaque token."""
from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, LocationMixin


class UserSession(LocationMixin, Base):
    """Identity snapshot taken at login time."""

    __tablename__ = "user_sessions"

    token: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True)
    user_type: Mapped[str] = mapped_column(String)
    name: Mapped[str] = mapped_column(String)
    mobile: Mapped[str] = mapped_column(String)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    expires_at: Mapped[datetime] = mapped_column(DateTime, index=True)
