"""Admin dashboard schemas: headline totals, daily sales and recent orders."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class DashboardParams(BaseModel):
    days: int = Field(default=30, ge=1, le=365)
    recent: int = Field(default=5, ge=1, le=50)


class DailySales(BaseModel):
    day: date
    total: Decimal


class RecentSale(BaseModel):
    id: str
    order_number: str
    customer_name: str | None = None
    customer_email: str | None = None
    amount: Decimal
    status: str
    created_at: datetime


class TopProduct(BaseModel):
    id: str
    title: str
    category: str | None = None
    price: Decimal
    download_count: int


class DashboardResponse(BaseModel):
    """Dashboard overview. Revenue counts paid orders only."""

    total_revenue: Decimal
    total_products: int
    total_orders: int
    total_users: int
    sales_overview: list[DailySales]
    recent_sales: list[RecentSale]
    top_products: list[TopProduct]
