"""Table reservation routes."""

from datetime import date as date_type
from typing import List, Optional

from fastapi import APIRouter, Query, status

from billgenie.core.rbac import CurrentUser, RequireManager
from billgenie.core.responses import Envelope, success_response
from billgenie.db.session import DbSession
from billgenie.models.reservations import ReservationStatus
from billgenie.schemas.reservations import (
    ReservationCreate,
    ReservationResponse,
    ReservationStatusUpdate,
)
from billgenie.services.reservations_service import ReservationService

router = APIRouter()


@router.post("", response_model=Envelope[ReservationResponse], status_code=status.HTTP_201_CREATED)
def create_reservation(reservation_in: ReservationCreate, db: DbSession, current_user: CurrentUser):
    """Book a table and mark it reserved."""
    reservation = ReservationService(db).create(reservation_in)
    return success_response(ReservationResponse.model_validate(reservation))


@router.get("", response_model=Envelope[List[ReservationResponse]])
def list_reservations(
    db: DbSession,
    current_user: CurrentUser,
    status: Optional[ReservationStatus] = None,
    on_date: Optional[date_type] = Query(None, alias="date", description="YYYY-MM-DD"),
):
    reservations = ReservationService(db).list(status=status, on_date=on_date)
    return success_response([ReservationResponse.model_validate(r) for r in reservations])


@router.get("/{reservation_id}", response_model=Envelope[ReservationResponse])
def get_reservation(reservation_id: int, db: DbSession, current_user: CurrentUser):
    reservation = ReservationService(db).get(reservation_id)
    return success_response(ReservationResponse.model_validate(reservation))


@router.patch("/{reservation_id}/status", response_model=Envelope[ReservationResponse])
def update_reservation_status(
    reservation_id: int,
    update: ReservationStatusUpdate,
    db: DbSession,
    current_user: CurrentUser,
):
    """Set the status; seating occupies the table, completion or cancellation frees it."""
    reservation = ReservationService(db).update_status(reservation_id, update.status)
    return success_response(ReservationResponse.model_validate(reservation))


@router.delete("/{reservation_id}", response_model=Envelope)
def delete_reservation(reservation_id: int, db: DbSession, current_user: RequireManager):
    ReservationService(db).delete(reservation_id)
    return success_response(message="Reservation deleted successfully")
