"""Reservation schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field

from billgenie.models.reservations import ReservationStatus
from billgenie.schemas.base import CamelModel
from billgenie.schemas.customer import CustomerResponse
from billgenie.schemas.restaurant import TableResponse


class ReservationCreate(CamelModel):
    """Create reservation schema."""

    customer_id: int
    table_id: int
    reservation_date: datetime
    number_of_guests: int = Field(
        ..., ge=1, validation_alias=AliasChoices("numberOfGuests", "guests", "number_of_guests")
    )
    special_requests: Optional[str] = Field(
        None, validation_alias=AliasChoices("specialRequests", "notes", "special_requests")
    )


class ReservationStatusUpdate(CamelModel):
    status: ReservationStatus


class ReservationResponse(CamelModel):
    """Reservation response schema with customer and table resolved."""

    id: int
    customer_id: int
    table_id: int
    customer: Optional[CustomerResponse] = None
    table: Optional[TableResponse] = None
    reservation_date: datetime
    number_of_guests: int
    status: ReservationStatus
    special_requests: Optional[str] = None
    created_at: datetime
    updated_at: datetime
