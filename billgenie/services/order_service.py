"""Order service: creation, status/payment updates and customer accrual."""

import logging
import math
import secrets
import time
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from billgenie.core.exceptions import BusinessRuleViolation, NotFoundError, ValidationError
from billgenie.models.customer import Customer
from billgenie.models.order import Order, OrderItem, OrderStatus, PaymentStatus
from billgenie.models.restaurant import MenuItem
from billgenie.schemas.order import OrderCreate

logger = logging.getLogger(__name__)


def generate_order_number() -> str:
    """``ORD`` + last six digits of epoch milliseconds + three random digits."""
    millis = str(int(time.time() * 1000))
    return f"ORD{millis[-6:]}{secrets.randbelow(1000):03d}"


class OrderService:
    """Order lifecycle operations bound to one database session."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Order).options(
            selectinload(Order.items).joinedload(OrderItem.menu_item),
            joinedload(Order.customer),
        )

    def create(self, data: OrderCreate) -> Order:
        """Persist a new pending order, then credit the customer.

        The order insert and the customer increment are two separate commits.
        """
        if data.customer_id is not None and self.db.get(Customer, data.customer_id) is None:
            raise NotFoundError("Customer")

        menu_item_ids = {item.menu_item_id for item in data.items}
        found = {
            row.id
            for row in self.db.query(MenuItem.id).filter(MenuItem.id.in_(menu_item_ids)).all()
        }
        missing = sorted(menu_item_ids - found)
        if missing:
            raise ValidationError(f"Menu item {missing[0]} does not exist")

        order = Order(
            order_number=generate_order_number(),
            table_number=data.table_number,
            customer_id=data.customer_id,
            order_type=data.order_type,
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            payment_method=data.payment_method,
            subtotal=Decimal(str(data.subtotal)),
            tax=Decimal(str(data.tax)),
            discount=Decimal(str(data.discount)),
            total=Decimal(str(data.total)),
            notes=data.notes,
            items=[
                OrderItem(
                    menu_item_id=item.menu_item_id,
                    quantity=item.quantity,
                    price=Decimal(str(item.price)),
                    special_instructions=item.special_instructions,
                )
                for item in data.items
            ],
        )
        self.db.add(order)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Order number collision on {order.order_number}")
            raise ValidationError("Order number already exists")

        logger.info(f"Created order {order.order_number} (ID: {order.id}, total: {data.total})")

        if data.customer_id is not None:
            self._accrue(data.customer_id, data.total)

        return self.get(order.id)

    def _accrue(self, customer_id: int, total: float) -> None:
        """Add one order, its total and floor(total) points to the customer."""
        self.db.execute(
            update(Customer)
            .where(Customer.id == customer_id)
            .values(
                total_orders=Customer.total_orders + 1,
                total_spent=Customer.total_spent + Decimal(str(total)),
                loyalty_points=Customer.loyalty_points + math.floor(total),
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()

    def list(
        self,
        status: Optional[OrderStatus] = None,
        order_type: Optional[str] = None,
        table_number: Optional[int] = None,
        customer_id: Optional[int] = None,
    ) -> List[Order]:
        query = self._query()
        if status is not None:
            query = query.filter(Order.status == getattr(status, "value", status))
        if order_type is not None:
            query = query.filter(Order.order_type == getattr(order_type, "value", order_type))
        if table_number is not None:
            query = query.filter(Order.table_number == table_number)
        if customer_id is not None:
            query = query.filter(Order.customer_id == customer_id)
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    def list_for_customer(self, customer_id: int) -> List[Order]:
        if self.db.get(Customer, customer_id) is None:
            raise NotFoundError("Customer")
        return self.list(customer_id=customer_id)

    def get(self, order_id: int) -> Order:
        order = self._query().filter(Order.id == order_id).first()
        if order is None:
            raise NotFoundError("Order")
        return order

    def set_status(self, order_id: int, status: OrderStatus) -> Order:
        """Overwrite the status; any status may follow any other."""
        order = self.get(order_id)
        previous = order.status
        order.status = status
        self.db.commit()
        logger.info(f"Order {order.order_number} status {previous} -> {order.status}")
        return self.get(order_id)

    def set_payment(
        self,
        order_id: int,
        payment_status: PaymentStatus,
        payment_method: Optional[str] = None,
    ) -> Order:
        """Overwrite payment fields regardless of the order status."""
        order = self.get(order_id)
        order.payment_status = payment_status
        if payment_method is not None:
            order.payment_method = payment_method
        self.db.commit()
        logger.info(f"Order {order.order_number} payment set to {order.payment_status}")
        return self.get(order_id)

    def cancel(self, order_id: int) -> Order:
        """Cancel an unpaid order. Customer accrual is left as is."""
        order = self.get(order_id)
        if order.payment_status == PaymentStatus.PAID.value:
            raise BusinessRuleViolation("Cannot cancel paid order. Refund required.")
        order.status = OrderStatus.CANCELLED
        self.db.commit()
        logger.info(f"Order {order.order_number} cancelled")
        return self.get(order_id)
