"""Customer order models."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from billgenie.core.exceptions import ValidationError
from billgenie.db.base import Base, TimestampMixin
from billgenie.models.validators import at_least_one, one_of


class OrderStatus(str, Enum):
    """Kitchen/service status of an order. Any value may follow any other."""

    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderType(str, Enum):
    DINE_IN = "dine-in"
    TAKEAWAY = "takeaway"
    DELIVERY = "delivery"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


ACTIVE_ORDER_STATUSES = (OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.READY)


class Order(Base, TimestampMixin):
    """A customer order.

    Money fields are taken as given by the caller; ``total`` is not derived
    from ``subtotal``, ``tax`` and ``discount``.
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    order_number: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    table_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    customer_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("customers.id", ondelete="SET NULL"), nullable=True, index=True
    )

    status: Mapped[str] = mapped_column(
        String(20), default=OrderStatus.PENDING.value, nullable=False, index=True
    )
    order_type: Mapped[str] = mapped_column(String(20), nullable=False)

    subtotal: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    tax: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    discount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    payment_status: Mapped[str] = mapped_column(
        String(20), default=PaymentStatus.PENDING.value, nullable=False
    )
    payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )
    customer: Mapped[Optional["Customer"]] = relationship("Customer")

    @validates("status")
    def _validate_status(self, key, value):
        return one_of(key, value, OrderStatus)

    @validates("order_type")
    def _validate_order_type(self, key, value):
        return one_of(key, value, OrderType)

    @validates("payment_status")
    def _validate_payment_status(self, key, value):
        return one_of(key, value, PaymentStatus)

    @validates("order_number")
    def _freeze_order_number(self, key, value):
        if self.order_number is not None and value != self.order_number:
            raise ValidationError("order_number cannot be changed once assigned")
        return value


class OrderItem(Base):
    """A line item embedded in an order. Has no lifecycle of its own."""

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Nulled if the menu item is later deleted; the price snapshot survives
    menu_item_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)  # unit price at order time
    special_instructions: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Relationships
    order: Mapped["Order"] = relationship("Order", back_populates="items")
    menu_item: Mapped[Optional["MenuItem"]] = relationship("MenuItem")

    @validates("quantity")
    def _validate_quantity(self, key, value):
        return at_least_one(key, value)


# Forward references
from billgenie.models.customer import Customer  # noqa: E402
from billgenie.models.restaurant import MenuItem  # noqa: E402
