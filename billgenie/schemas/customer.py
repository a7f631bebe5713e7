"""Customer schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from billgenie.schemas.base import CamelModel


class Address(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None


class CustomerBase(CamelModel):
    """Base customer schema."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    address: Optional[Address] = None
    preferences: Optional[List[str]] = None
    allergies: Optional[List[str]] = None


class CustomerCreate(CustomerBase):
    """Create customer schema. Counters always start at zero."""


class CustomerUpdate(CamelModel):
    """Update customer schema. Counters are maintained by order creation only."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=50)
    address: Optional[Address] = None
    preferences: Optional[List[str]] = None
    allergies: Optional[List[str]] = None


class CustomerResponse(CustomerBase):
    """Customer response schema."""

    id: int
    email: str
    loyalty_points: int
    total_orders: int
    total_spent: float
    created_at: datetime
    updated_at: datetime
