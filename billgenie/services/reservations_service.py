"""Reservation service: conflict checks and table status synchronisation."""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from billgenie.core.exceptions import BusinessRuleViolation, NotFoundError
from billgenie.models.customer import Customer
from billgenie.models.reservations import HOLDING_STATUSES, Reservation, ReservationStatus
from billgenie.models.restaurant import Table, TableStatus
from billgenie.schemas.reservations import ReservationCreate

logger = logging.getLogger(__name__)

# Table status applied when a reservation enters the given status
TABLE_STATUS_ON_RESERVATION = {
    ReservationStatus.SEATED.value: TableStatus.OCCUPIED,
    ReservationStatus.COMPLETED.value: TableStatus.AVAILABLE,
    ReservationStatus.CANCELLED.value: TableStatus.AVAILABLE,
}


def as_naive_utc(value: datetime) -> datetime:
    """Reservation times are stored as naive UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ReservationService:
    """Manage table reservations."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Reservation).options(
            joinedload(Reservation.customer),
            joinedload(Reservation.table),
        )

    def _set_table_status(self, table_id: int, status: TableStatus) -> None:
        table = self.db.get(Table, table_id)
        if table is None:
            return
        table.status = status
        self.db.commit()

    def create(self, data: ReservationCreate) -> Reservation:
        """Book a table unless another live reservation holds the same slot.

        The check, the insert and the table update are separate steps; two
        concurrent bookings for one slot can both succeed.
        """
        if self.db.get(Customer, data.customer_id) is None:
            raise NotFoundError("Customer")
        if self.db.get(Table, data.table_id) is None:
            raise NotFoundError("Table")

        when = as_naive_utc(data.reservation_date)
        conflict = self.db.query(Reservation.id).filter(
            Reservation.table_id == data.table_id,
            Reservation.reservation_date == when,
            Reservation.status.in_(HOLDING_STATUSES),
        ).first()
        if conflict is not None:
            raise BusinessRuleViolation("Table is already reserved for this time slot")

        reservation = Reservation(
            customer_id=data.customer_id,
            table_id=data.table_id,
            reservation_date=when,
            number_of_guests=data.number_of_guests,
            special_requests=data.special_requests,
            status=ReservationStatus.PENDING,
        )
        self.db.add(reservation)
        self.db.commit()
        logger.info(f"Reservation {reservation.id} created for table {data.table_id} at {when}")

        self._set_table_status(data.table_id, TableStatus.RESERVED)
        return self.get(reservation.id)

    def list(
        self,
        status: Optional[ReservationStatus] = None,
        on_date: Optional[date] = None,
    ) -> List[Reservation]:
        query = self._query()
        if status is not None:
            query = query.filter(Reservation.status == getattr(status, "value", status))
        if on_date is not None:
            start = datetime.combine(on_date, time.min)
            query = query.filter(
                Reservation.reservation_date >= start,
                Reservation.reservation_date < start + timedelta(days=1),
            )
        return query.order_by(Reservation.reservation_date.asc(), Reservation.id.asc()).all()

    def get(self, reservation_id: int) -> Reservation:
        reservation = self._query().filter(Reservation.id == reservation_id).first()
        if reservation is None:
            raise NotFoundError("Reservation")
        return reservation

    def update_status(self, reservation_id: int, status: ReservationStatus) -> Reservation:
        """Overwrite the status and move the table along with it."""
        reservation = self.get(reservation_id)
        reservation.status = status
        self.db.commit()

        table_status = TABLE_STATUS_ON_RESERVATION.get(reservation.status)
        if table_status is not None:
            self._set_table_status(reservation.table_id, table_status)

        logger.info(f"Reservation {reservation_id} status set to {reservation.status}")
        return self.get(reservation_id)

    def delete(self, reservation_id: int) -> None:
        """Remove the reservation and free its table whatever its state."""
        reservation = self.get(reservation_id)
        table_id = reservation.table_id
        self.db.delete(reservation)
        self.db.commit()
        self._set_table_status(table_id, TableStatus.AVAILABLE)
        logger.info(f"Reservation {reservation_id} deleted, table {table_id} freed")
