"""Restaurant table (floor) routes."""

from typing import List, Optional

from fastapi import APIRouter, status
from sqlalchemy.orm import joinedload

from billgenie.core.exceptions import NotFoundError
from billgenie.core.rbac import CurrentUser, RequireManager
from billgenie.core.responses import Envelope, success_response
from billgenie.db.session import DbSession
from billgenie.models.restaurant import Table, TableStatus
from billgenie.schemas.restaurant import TableCreate, TableResponse, TableStatusUpdate, TableUpdate

router = APIRouter()


def _get_table(db, table_id: int) -> Table:
    table = (
        db.query(Table)
        .options(joinedload(Table.current_order))
        .filter(Table.id == table_id)
        .first()
    )
    if table is None:
        raise NotFoundError("Table")
    return table


@router.get("", response_model=Envelope[List[TableResponse]])
def list_tables(
    db: DbSession,
    current_user: CurrentUser,
    status: Optional[TableStatus] = None,
    location: Optional[str] = None,
):
    query = db.query(Table).options(joinedload(Table.current_order))
    if status is not None:
        query = query.filter(Table.status == status.value)
    if location:
        query = query.filter(Table.location == location)
    tables = query.order_by(Table.table_number).all()
    return success_response([TableResponse.model_validate(t) for t in tables])


@router.get("/{table_id}", response_model=Envelope[TableResponse])
def get_table(table_id: int, db: DbSession, current_user: CurrentUser):
    return success_response(TableResponse.model_validate(_get_table(db, table_id)))


@router.post("", response_model=Envelope[TableResponse], status_code=status.HTTP_201_CREATED)
def create_table(table_in: TableCreate, db: DbSession, current_user: RequireManager):
    table = Table(**table_in.model_dump())
    db.add(table)
    db.commit()
    return success_response(TableResponse.model_validate(_get_table(db, table.id)))


@router.put("/{table_id}", response_model=Envelope[TableResponse])
def update_table(table_id: int, table_in: TableUpdate, db: DbSession, current_user: RequireManager):
    table = _get_table(db, table_id)
    for field, value in table_in.model_dump(exclude_unset=True).items():
        setattr(table, field, value)
    db.commit()
    return success_response(TableResponse.model_validate(_get_table(db, table_id)))


@router.patch("/{table_id}/status", response_model=Envelope[TableResponse])
def update_table_status(
    table_id: int, update: TableStatusUpdate, db: DbSession, current_user: CurrentUser
):
    """Set the table status; ``currentOrderId`` is written only when sent."""
    table = _get_table(db, table_id)
    table.status = update.status
    if "current_order_id" in update.model_fields_set:
        table.current_order_id = update.current_order_id or None
    db.commit()
    return success_response(TableResponse.model_validate(_get_table(db, table_id)))


@router.delete("/{table_id}", response_model=Envelope)
def delete_table(table_id: int, db: DbSession, current_user: RequireManager):
    table = _get_table(db, table_id)
    db.delete(table)
    db.commit()
    return success_response(message="Table deleted successfully")
