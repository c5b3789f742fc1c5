"""User accounts authenticated by mobile number."""
from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, LocationMixin

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


class User(LocationMixin, Base):
    """Registered farmer, officer or admin."""

    __tablename__ = "users"

    __table_args__ = (
        UniqueConstraint("mobile", name="uq_users_mobile"),
        Index("ix_users_mobile_user_type", "mobile", "user_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_type: Mapped[str] = mapped_column(String, index=True)
    name: Mapped[str] = mapped_column(String)
    mobile: Mapped[str] = mapped_column(String)
    password: Mapped[str] = mapped_column(String)
    email: Mapped[str] = mapped_column(String, default="")
    address: Mapped[str] = mapped_column(String, default="")
    status: Mapped[str] = mapped_column(String, default=STATUS_ACTIVE, server_default=STATUS_ACTIVE)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE
