"""Customer management routes - CRM functionality."""

from typing import List

from fastapi import APIRouter, status

from billgenie.core.exceptions import NotFoundError
from billgenie.core.rbac import CurrentUser, RequireManager
from billgenie.core.responses import Envelope, success_response
from billgenie.db.session import DbSession
from billgenie.models.customer import Customer
from billgenie.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from billgenie.schemas.order import OrderResponse
from billgenie.services.order_service import OrderService

router = APIRouter()


def _get_customer(db, customer_id: int) -> Customer:
    customer = db.get(Customer, customer_id)
    if customer is None:
        raise NotFoundError("Customer")
    return customer


@router.post("", response_model=Envelope[CustomerResponse], status_code=status.HTTP_201_CREATED)
def create_customer(customer_in: CustomerCreate, db: DbSession, current_user: CurrentUser):
    """Create a customer. Order counters start at zero."""
    customer = Customer(**customer_in.model_dump())
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return success_response(CustomerResponse.model_validate(customer))


@router.get("", response_model=Envelope[List[CustomerResponse]])
def list_customers(db: DbSession, current_user: CurrentUser):
    customers = db.query(Customer).order_by(Customer.created_at.desc(), Customer.id.desc()).all()
    return success_response([CustomerResponse.model_validate(c) for c in customers])


@router.get("/{customer_id}", response_model=Envelope[CustomerResponse])
def get_customer(customer_id: int, db: DbSession, current_user: CurrentUser):
    return success_response(CustomerResponse.model_validate(_get_customer(db, customer_id)))


@router.get("/{customer_id}/orders", response_model=Envelope[List[OrderResponse]])
def get_customer_orders(customer_id: int, db: DbSession, current_user: CurrentUser):
    """A customer's order history, newest first."""
    orders = OrderService(db).list_for_customer(customer_id)
    return success_response([OrderResponse.model_validate(o) for o in orders])


@router.put("/{customer_id}", response_model=Envelope[CustomerResponse])
def update_customer(
    customer_id: int, customer_in: CustomerUpdate, db: DbSession, current_user: CurrentUser
):
    customer = _get_customer(db, customer_id)
    for field, value in customer_in.model_dump(exclude_unset=True).items():
        setattr(customer, field, value)
    db.commit()
    db.refresh(customer)
    return success_response(CustomerResponse.model_validate(customer))


@router.delete("/{customer_id}", response_model=Envelope)
def delete_customer(customer_id: int, db: DbSession, current_user: RequireManager):
    """Delete a customer. Their orders are kept without the link."""
    customer = _get_customer(db, customer_id)
    db.delete(customer)
    db.commit()
    return success_response(message="Customer deleted successfully")
