# src/stackit/models/user.py
"""SQLAlchemy models for forum accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stackit.db.session import Base
from stackit.db.time import utcnow

ROLE_GUEST = "guest"
ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_GUEST, ROLE_USER, ROLE_ADMIN)


class User(Base):
    """Registered account with a single role from a closed set."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('guest', 'user', 'admin')", name="ck_users_role"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    # Changed only through the admin role-update operation.
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_USER)

    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    @property
    def is_admin(self) -> bool:
        """Return True when the account holds the admin role."""
        return self.role == ROLE_ADMIN
