"""Customer model for CRM."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import Integer, JSON, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from billgenie.db.base import Base, TimestampMixin
from billgenie.models.validators import non_negative, string_list


class Customer(Base, TimestampMixin):
    """Customer record with order-history counters.

    ``total_orders``, ``total_spent`` and ``loyalty_points`` only ever grow,
    as a side effect of order creation.
    """

    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)  # street, city, state, zipCode

    # Order history stats
    loyalty_points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_orders: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_spent: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)

    # Preferences
    preferences: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    allergies: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)  # ['Gluten', 'Dairy', ...]

    @validates("email")
    def _normalize_email(self, key, value):
        return value.strip().lower() if value else value

    @validates("loyalty_points", "total_orders", "total_spent")
    def _validate_non_negative(self, key, value):
        return non_negative(key, value)

    @validates("preferences", "allergies")
    def _validate_lists(self, key, value):
        return string_list(key, value)
