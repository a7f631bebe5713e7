"""Menu catalog routes. Reads are public."""

from typing import List, Optional

from fastapi import APIRouter, status

from billgenie.core.exceptions import NotFoundError
from billgenie.core.rbac import RequireManager
from billgenie.core.responses import Envelope, success_response
from billgenie.db.session import DbSession
from billgenie.models.restaurant import MenuItem
from billgenie.schemas.restaurant import MenuItemCreate, MenuItemResponse, MenuItemUpdate

router = APIRouter()


def _get_menu_item(db, item_id: int) -> MenuItem:
    item = db.get(MenuItem, item_id)
    if item is None:
        raise NotFoundError("Menu item")
    return item


@router.get("", response_model=Envelope[List[MenuItemResponse]])
def list_menu_items(
    db: DbSession,
    category: Optional[str] = None,
    available: Optional[bool] = None,
):
    """List menu items grouped by category, then by name."""
    query = db.query(MenuItem)
    if category:
        query = query.filter(MenuItem.category == category)
    if available is not None:
        query = query.filter(MenuItem.available.is_(available))
    items = query.order_by(MenuItem.category, MenuItem.name).all()
    return success_response([MenuItemResponse.model_validate(i) for i in items])


@router.get("/{item_id}", response_model=Envelope[MenuItemResponse])
def get_menu_item(item_id: int, db: DbSession):
    return success_response(MenuItemResponse.model_validate(_get_menu_item(db, item_id)))


@router.post("", response_model=Envelope[MenuItemResponse], status_code=status.HTTP_201_CREATED)
def create_menu_item(item_in: MenuItemCreate, db: DbSession, current_user: RequireManager):
    item = MenuItem(**item_in.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return success_response(MenuItemResponse.model_validate(item))


@router.put("/{item_id}", response_model=Envelope[MenuItemResponse])
def update_menu_item(
    item_id: int, item_in: MenuItemUpdate, db: DbSession, current_user: RequireManager
):
    item = _get_menu_item(db, item_id)
    for field, value in item_in.model_dump(exclude_unset=True).items():
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return success_response(MenuItemResponse.model_validate(item))


@router.delete("/{item_id}", response_model=Envelope)
def delete_menu_item(item_id: int, db: DbSession, current_user: RequireManager):
    """Delete a menu item. Past order lines keep their price snapshot."""
    item = _get_menu_item(db, item_id)
    db.delete(item)
    db.commit()
    return success_response(message="Menu item deleted successfully")
