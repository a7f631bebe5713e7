"""Customer order routes."""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from billgenie.core.rbac import CurrentUser, RequireCashier
from billgenie.core.responses import Envelope, success_response
from billgenie.db.session import DbSession
from billgenie.models.order import OrderStatus, OrderType
from billgenie.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate, PaymentUpdate
from billgenie.services.order_service import OrderService

router = APIRouter()


@router.post("", response_model=Envelope[OrderResponse], status_code=status.HTTP_201_CREATED)
def create_order(order_in: OrderCreate, db: DbSession, current_user: CurrentUser):
    """Place an order. A linked customer is credited with its total."""
    order = OrderService(db).create(order_in)
    return success_response(OrderResponse.model_validate(order))


@router.get("", response_model=Envelope[List[OrderResponse]])
def list_orders(
    db: DbSession,
    current_user: CurrentUser,
    status: Optional[OrderStatus] = None,
    order_type: Optional[OrderType] = Query(None, alias="orderType"),
    table_number: Optional[int] = Query(None, alias="tableNumber"),
    customer_id: Optional[int] = Query(None, alias="customerId"),
):
    """List orders, newest first."""
    orders = OrderService(db).list(
        status=status,
        order_type=order_type,
        table_number=table_number,
        customer_id=customer_id,
    )
    return success_response([OrderResponse.model_validate(o) for o in orders])


@router.get("/{order_id}", response_model=Envelope[OrderResponse])
def get_order(order_id: int, db: DbSession, current_user: CurrentUser):
    return success_response(OrderResponse.model_validate(OrderService(db).get(order_id)))


@router.patch("/{order_id}/status", response_model=Envelope[OrderResponse])
def update_order_status(
    order_id: int, update: OrderStatusUpdate, db: DbSession, current_user: CurrentUser
):
    order = OrderService(db).set_status(order_id, update.status)
    return success_response(OrderResponse.model_validate(order))


@router.patch("/{order_id}/payment", response_model=Envelope[OrderResponse])
def update_payment_status(
    order_id: int, update: PaymentUpdate, db: DbSession, current_user: RequireCashier
):
    order = OrderService(db).set_payment(order_id, update.payment_status, update.payment_method)
    return success_response(OrderResponse.model_validate(order))


@router.patch("/{order_id}/cancel", response_model=Envelope[OrderResponse])
def cancel_order(order_id: int, db: DbSession, current_user: CurrentUser):
    return success_response(OrderResponse.model_validate(OrderService(db).cancel(order_id)))
