"""Order schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field

from billgenie.models.order import OrderStatus, OrderType, PaymentStatus
from billgenie.schemas.base import CamelModel
from billgenie.schemas.customer import CustomerResponse
from billgenie.schemas.restaurant import MenuItemResponse


class OrderItemCreate(CamelModel):
    """A line item in an order creation request."""

    menu_item_id: int = Field(
        ..., validation_alias=AliasChoices("menuItem", "menuItemId", "menu_item_id")
    )
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    special_instructions: Optional[str] = Field(None, max_length=500)


class OrderCreate(CamelModel):
    """Order creation schema.

    Money fields are trusted as sent; the server does not recompute them.
    """

    order_type: OrderType
    items: List[OrderItemCreate] = Field(..., min_length=1)
    table_number: Optional[int] = None
    customer_id: Optional[int] = None
    subtotal: float
    tax: float
    discount: float = 0
    total: float
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class PaymentUpdate(CamelModel):
    payment_status: PaymentStatus
    payment_method: Optional[str] = None


class OrderItemResponse(CamelModel):
    """Line item with its menu item resolved."""

    id: int
    menu_item_id: Optional[int] = None
    menu_item: Optional[MenuItemResponse] = None
    quantity: int
    price: float
    special_instructions: Optional[str] = None


class OrderResponse(CamelModel):
    """Order response schema."""

    id: int
    order_number: str
    table_number: Optional[int] = None
    customer_id: Optional[int] = None
    customer: Optional[CustomerResponse] = None
    items: List[OrderItemResponse] = []
    status: OrderStatus
    order_type: OrderType
    subtotal: float
    tax: float
    discount: float
    total: float
    payment_status: PaymentStatus
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
