"""Reservation model."""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship, validates

from billgenie.db.base import Base, utcnow
from billgenie.models.validators import at_least_one, one_of


class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SEATED = "seated"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# A reservation in one of these states holds its table for its time slot
HOLDING_STATUSES = (
    ReservationStatus.PENDING.value,
    ReservationStatus.CONFIRMED.value,
    ReservationStatus.SEATED.value,
)


class Reservation(Base):
    """A customer's claim on a table for a specific date/time."""
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    table_id = Column(Integer, ForeignKey("tables.id", ondelete="CASCADE"), nullable=False, index=True)

    reservation_date = Column(DateTime, nullable=False, index=True)
    number_of_guests = Column(Integer, nullable=False)
    status = Column(String(20), default=ReservationStatus.PENDING.value, nullable=False)
    special_requests = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    customer = relationship("Customer")
    table = relationship("Table")

    @validates('status')
    def _validate_status(self, key, value):
        return one_of(key, value, ReservationStatus)

    @validates('number_of_guests')
    def _validate_guests(self, key, value):
        return at_least_one(key, value)
