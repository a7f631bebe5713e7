"""Read-only sales, menu and customer aggregations."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import func
from sqlalchemy.orm import Session

from billgenie.core.config import settings
from billgenie.models.customer import Customer
from billgenie.models.order import ACTIVE_ORDER_STATUSES, Order, OrderItem, OrderStatus, PaymentStatus
from billgenie.models.restaurant import MenuItem


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def local_midnight_utc(now: Optional[datetime] = None, tz_name: Optional[str] = None) -> datetime:
    """Start of the current local day in the restaurant's timezone, as UTC."""
    tz = ZoneInfo(tz_name or settings.timezone)
    local_now = (now or datetime.now(timezone.utc)).astimezone(tz)
    midnight = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc)


class AnalyticsService:
    """Aggregations over orders and customers. Nothing is cached."""

    def __init__(self, db: Session):
        self.db = db

    def sales_report(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Revenue and order counts over paid orders created in [start, end]."""
        query = self.db.query(
            Order.order_type,
            func.count(Order.id),
            func.coalesce(func.sum(Order.total), 0),
        ).filter(Order.payment_status == PaymentStatus.PAID.value)
        if start_date is not None:
            query = query.filter(Order.created_at >= _as_utc(start_date))
        if end_date is not None:
            query = query.filter(Order.created_at <= _as_utc(end_date))

        orders_by_type: Dict[str, int] = {}
        total_orders = 0
        total_revenue = 0.0
        for order_type, count, revenue in query.group_by(Order.order_type).all():
            orders_by_type[order_type] = count
            total_orders += count
            total_revenue += float(revenue)

        return {
            "total_revenue": round(total_revenue, 2),
            "total_orders": total_orders,
            "average_order_value": round(total_revenue / total_orders, 2) if total_orders else 0,
            "orders_by_type": orders_by_type,
        }

    def popular_items(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Menu items ranked by quantity sold, ignoring cancelled orders."""
        total_quantity = func.sum(OrderItem.quantity)
        rows = (
            self.db.query(
                OrderItem.menu_item_id,
                func.count(OrderItem.id),
                total_quantity,
                func.sum(OrderItem.price * OrderItem.quantity),
            )
            .join(Order, OrderItem.order_id == Order.id)
            .filter(
                Order.status != OrderStatus.CANCELLED.value,
                OrderItem.menu_item_id.isnot(None),
            )
            .group_by(OrderItem.menu_item_id)
            .order_by(total_quantity.desc(), OrderItem.menu_item_id.asc())
            .limit(limit)
            .all()
        )

        ids = [row[0] for row in rows]
        menu_items = {}
        if ids:
            menu_items = {m.id: m for m in self.db.query(MenuItem).filter(MenuItem.id.in_(ids)).all()}

        return [
            {
                "menu_item_id": menu_item_id,
                "menu_item": menu_items.get(menu_item_id),
                "total_orders": line_count,
                "total_quantity": int(quantity or 0),
                "total_revenue": round(float(revenue or 0), 2),
            }
            for menu_item_id, line_count, quantity, revenue in rows
        ]

    def customer_analytics(self) -> Dict[str, Any]:
        total_customers, order_sum = self.db.query(
            func.count(Customer.id),
            func.coalesce(func.sum(Customer.total_orders), 0),
        ).one()
        top_customers = (
            self.db.query(Customer)
            .order_by(Customer.total_spent.desc(), Customer.id.asc())
            .limit(10)
            .all()
        )
        return {
            "total_customers": total_customers,
            "top_customers": top_customers,
            "average_orders_per_customer": (
                round(int(order_sum) / total_customers, 2) if total_customers else 0
            ),
        }

    def dashboard(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Counters for the front page. "Today" starts at local midnight."""
        today_start = local_midnight_utc(now)

        today_orders = (
            self.db.query(func.count(Order.id)).filter(Order.created_at >= today_start).scalar()
        )
        today_revenue = (
            self.db.query(func.coalesce(func.sum(Order.total), 0))
            .filter(
                Order.created_at >= today_start,
                Order.payment_status == PaymentStatus.PAID.value,
            )
            .scalar()
        )
        active_orders = (
            self.db.query(func.count(Order.id))
            .filter(Order.status.in_([s.value for s in ACTIVE_ORDER_STATUSES]))
            .scalar()
        )
        total_customers = self.db.query(func.count(Customer.id)).scalar()

        return {
            "today_orders": today_orders or 0,
            "today_revenue": round(float(today_revenue or 0), 2),
            "active_orders": active_orders or 0,
            "total_customers": total_customers or 0,
        }
