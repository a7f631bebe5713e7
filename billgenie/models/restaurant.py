"""Restaurant floor and catalog models - tables and menu items."""

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, Numeric, String, Text
from sqlalchemy.orm import relationship, validates

from billgenie.db.base import Base, utcnow
from billgenie.models.validators import at_least_one, non_negative, one_of, string_list


class TableStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    CLEANING = "cleaning"


class Table(Base):
    """Restaurant table for seating."""
    __tablename__ = "tables"

    id = Column(Integer, primary_key=True, index=True)
    table_number = Column(Integer, nullable=False, unique=True)
    capacity = Column(Integer, nullable=False)
    status = Column(String(20), default=TableStatus.AVAILABLE.value, nullable=False)
    location = Column(String(100), nullable=False)  # Main Floor, Patio, Bar

    # Back-reference to the order currently occupying the table; the order
    # does not know about it
    current_order_id = Column(Integer, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    current_order = relationship("Order", foreign_keys=[current_order_id])

    @validates('status')
    def _validate_status(self, key, value):
        return one_of(key, value, TableStatus)

    @validates('capacity')
    def _validate_capacity(self, key, value):
        return at_least_one(key, value)


class MenuItem(Base):
    """Menu item for ordering."""
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)

    image_url = Column(String(500), nullable=True)
    available = Column(Boolean, default=True, nullable=False)
    preparation_time = Column(Integer, nullable=False)  # minutes

    ingredients = Column(JSON, nullable=True)
    allergens = Column(JSON, nullable=True)
    nutritional_info = Column(JSON, nullable=True)  # calories, protein, carbs, fat

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    @validates('price', 'preparation_time')
    def _validate_non_negative(self, key, value):
        return non_negative(key, value)

    @validates('ingredients', 'allergens')
    def _validate_lists(self, key, value):
        return string_list(key, value)
