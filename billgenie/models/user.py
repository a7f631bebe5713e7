"""User model."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from billgenie.core.rbac import UserRole
from billgenie.db.base import Base, TimestampMixin
from billgenie.models.validators import one_of


class User(Base, TimestampMixin):
    """Staff account for authentication and RBAC."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    role: Mapped[str] = mapped_column(String(20), default=UserRole.WAITER.value, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    @validates("role")
    def _validate_role(self, key, value):
        return one_of(key, value, UserRole)

    @validates("email")
    def _normalize_email(self, key, value):
        return value.strip().lower() if value else value
