"""Inventory schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from billgenie.schemas.base import CamelModel


class InventoryItemBase(CamelModel):
    item_name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    quantity: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=20)
    reorder_level: float
    supplier: str = Field(..., min_length=1, max_length=200)
    cost_per_unit: float
    expiry_date: Optional[datetime] = None


class InventoryItemCreate(InventoryItemBase):
    last_restocked: Optional[datetime] = None


class InventoryItemUpdate(CamelModel):
    item_name: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=20)
    reorder_level: Optional[float] = None
    supplier: Optional[str] = Field(None, min_length=1, max_length=200)
    cost_per_unit: Optional[float] = None
    expiry_date: Optional[datetime] = None


class RestockRequest(CamelModel):
    """Quantity to add to the current stock level."""

    quantity: float = Field(..., gt=0)


class InventoryItemResponse(InventoryItemBase):
    id: int
    last_restocked: datetime
    is_low_stock: bool
    created_at: datetime
    updated_at: datetime
