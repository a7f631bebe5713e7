"""Sales and customer analytics routes."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Query

from billgenie.core.rbac import CurrentUser, RequireManager
from billgenie.core.responses import Envelope, success_response
from billgenie.db.session import DbSession
from billgenie.schemas.analytics import CustomerAnalytics, DashboardStats, PopularItem, SalesReport
from billgenie.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("/sales", response_model=Envelope[SalesReport])
def get_sales_report(
    db: DbSession,
    current_user: RequireManager,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
):
    """Revenue over paid orders, optionally bounded by creation date."""
    report = AnalyticsService(db).sales_report(start_date, end_date)
    return success_response(SalesReport.model_validate(report))


@router.get("/popular-items", response_model=Envelope[List[PopularItem]])
def get_popular_items(
    db: DbSession,
    current_user: RequireManager,
    limit: int = Query(10, ge=1, le=100),
):
    items = AnalyticsService(db).popular_items(limit)
    return success_response([PopularItem.model_validate(i, from_attributes=True) for i in items])


@router.get("/customers", response_model=Envelope[CustomerAnalytics])
def get_customer_analytics(db: DbSession, current_user: RequireManager):
    return success_response(CustomerAnalytics.model_validate(
        AnalyticsService(db).customer_analytics(), from_attributes=True
    ))


@router.get("/dashboard", response_model=Envelope[DashboardStats])
def get_dashboard_stats(db: DbSession, current_user: CurrentUser):
    return success_response(DashboardStats.model_validate(AnalyticsService(db).dashboard()))
