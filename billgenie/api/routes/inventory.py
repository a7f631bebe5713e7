"""Inventory (stock) routes."""

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Query, status
from sqlalchemy import update

from billgenie.core.exceptions import NotFoundError
from billgenie.core.rbac import CurrentUser, RequireManager
from billgenie.core.responses import Envelope, success_response
from billgenie.db.base import utcnow
from billgenie.db.session import DbSession
from billgenie.models.inventory import InventoryItem
from billgenie.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    RestockRequest,
)

router = APIRouter()


def _get_item(db, item_id: int) -> InventoryItem:
    item = db.get(InventoryItem, item_id)
    if item is None:
        raise NotFoundError("Inventory item")
    return item


@router.get("", response_model=Envelope[List[InventoryItemResponse]])
def list_inventory(
    db: DbSession,
    current_user: CurrentUser,
    category: Optional[str] = None,
    low_stock: bool = Query(False, alias="lowStock"),
):
    """List stock items by name; ``lowStock=true`` keeps items at or below reorder level."""
    query = db.query(InventoryItem)
    if category:
        query = query.filter(InventoryItem.category == category)
    if low_stock:
        query = query.filter(InventoryItem.quantity <= InventoryItem.reorder_level)
    items = query.order_by(InventoryItem.item_name, InventoryItem.id).all()
    return success_response([InventoryItemResponse.model_validate(i) for i in items])


@router.get("/{item_id}", response_model=Envelope[InventoryItemResponse])
def get_inventory_item(item_id: int, db: DbSession, current_user: CurrentUser):
    return success_response(InventoryItemResponse.model_validate(_get_item(db, item_id)))


@router.post("", response_model=Envelope[InventoryItemResponse], status_code=status.HTTP_201_CREATED)
def create_inventory_item(item_in: InventoryItemCreate, db: DbSession, current_user: RequireManager):
    data = item_in.model_dump(exclude_none=True)
    item = InventoryItem(**data)
    db.add(item)
    db.commit()
    db.refresh(item)
    return success_response(InventoryItemResponse.model_validate(item))


@router.put("/{item_id}", response_model=Envelope[InventoryItemResponse])
def update_inventory_item(
    item_id: int, item_in: InventoryItemUpdate, db: DbSession, current_user: RequireManager
):
    item = _get_item(db, item_id)
    for field, value in item_in.model_dump(exclude_unset=True).items():
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return success_response(InventoryItemResponse.model_validate(item))


@router.patch("/{item_id}/restock", response_model=Envelope[InventoryItemResponse])
def restock_inventory_item(
    item_id: int, restock: RestockRequest, db: DbSession, current_user: RequireManager
):
    """Add stock with a single atomic increment and stamp the restock time."""
    _get_item(db, item_id)
    db.execute(
        update(InventoryItem)
        .where(InventoryItem.id == item_id)
        .values(
            quantity=InventoryItem.quantity + Decimal(str(restock.quantity)),
            last_restocked=utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return success_response(InventoryItemResponse.model_validate(_get_item(db, item_id)))


@router.delete("/{item_id}", response_model=Envelope)
def delete_inventory_item(item_id: int, db: DbSession, current_user: RequireManager):
    item = _get_item(db, item_id)
    db.delete(item)
    db.commit()
    return success_response(message="Inventory item deleted successfully")
