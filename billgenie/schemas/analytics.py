"""Analytics report schemas."""

from typing import Dict, List, Optional

from billgenie.schemas.base import CamelModel
from billgenie.schemas.restaurant import MenuItemResponse


class SalesReport(CamelModel):
    total_revenue: float
    total_orders: int
    average_order_value: float
    orders_by_type: Dict[str, int]


class PopularItem(CamelModel):
    menu_item_id: Optional[int] = None
    menu_item: Optional[MenuItemResponse] = None
    total_orders: int
    total_quantity: int
    total_revenue: float


class TopCustomer(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    total_orders: int
    total_spent: float
    loyalty_points: int


class CustomerAnalytics(CamelModel):
    total_customers: int
    top_customers: List[TopCustomer]
    average_orders_per_customer: float


class DashboardStats(CamelModel):
    today_orders: int
    today_revenue: float
    active_orders: int
    total_customers: int
