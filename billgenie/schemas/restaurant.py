"""Menu item and table schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from billgenie.models.restaurant import TableStatus
from billgenie.schemas.base import CamelModel


# Menu

class NutritionalInfo(CamelModel):
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None


class MenuItemBase(CamelModel):
    """Base menu item schema."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str
    category: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., ge=0)
    image_url: Optional[str] = None
    available: bool = True
    preparation_time: int = Field(..., ge=0)
    ingredients: List[str] = []
    allergens: List[str] = []
    nutritional_info: Optional[NutritionalInfo] = None


class MenuItemCreate(MenuItemBase):
    """Create menu item schema."""


class MenuItemUpdate(CamelModel):
    """Update menu item schema."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = None
    available: Optional[bool] = None
    preparation_time: Optional[int] = Field(None, ge=0)
    ingredients: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    nutritional_info: Optional[NutritionalInfo] = None


class MenuItemResponse(MenuItemBase):
    """Menu item response schema."""

    id: int
    ingredients: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime


# Tables

class TableCreate(CamelModel):
    """Create table request."""

    table_number: int = Field(..., ge=1)
    capacity: int = Field(..., ge=1)
    location: str = Field(..., min_length=1, max_length=100)
    status: TableStatus = TableStatus.AVAILABLE


class TableUpdate(CamelModel):
    """Update table request."""

    table_number: Optional[int] = Field(None, ge=1)
    capacity: Optional[int] = Field(None, ge=1)
    location: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[TableStatus] = None


class TableStatusUpdate(CamelModel):
    """Body of ``PATCH /tables/{id}/status``.

    ``current_order_id`` is only written when the key is present in the body;
    a falsy value clears it.
    """

    status: TableStatus
    current_order_id: Optional[int] = None


class CurrentOrderSummary(CamelModel):
    """The order occupying a table, as shown on the floor plan."""

    id: int
    order_number: str
    status: str
    total: float


class TableResponse(CamelModel):
    """Table response model."""

    id: int
    table_number: int
    capacity: int
    status: str
    location: str
    current_order_id: Optional[int] = None
    current_order: Optional[CurrentOrderSummary] = None
    created_at: datetime
    updated_at: datetime
