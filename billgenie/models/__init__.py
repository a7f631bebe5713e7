"""SQLAlchemy models."""

from billgenie.models.user import User
from billgenie.models.customer import Customer
from billgenie.models.restaurant import MenuItem, Table, TableStatus
from billgenie.models.order import (
    Order,
    OrderItem,
    OrderStatus,
    OrderType,
    PaymentStatus,
)
from billgenie.models.reservations import Reservation, ReservationStatus
from billgenie.models.inventory import InventoryItem

__all__ = [
    "User",
    "Customer",
    "MenuItem",
    "Table",
    "TableStatus",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderType",
    "PaymentStatus",
    "Reservation",
    "ReservationStatus",
    "InventoryItem",
]
