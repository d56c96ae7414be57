"""Cached admin dashboard: revenue, totals, daily sales, recent orders, top products."""

from collections.abc import Iterable
from datetime import UTC, date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from storefront.core.constants import (
    DASHBOARD_CACHE_TTL,
    TAG_ORDERS,
    TAG_PRODUCTS,
    TAG_USERS,
)
from storefront.infrastructure.cache.cache_protocol import CacheProtocol
from storefront.infrastructure.cache.decorators import cached
from storefront.infrastructure.persistence.repositories.dashboard_repo import (
    DashboardRepository,
)
from storefront.schemas.dashboard import DashboardParams, DashboardResponse, TopProduct

TOP_PRODUCTS_LIMIT = 5


def daily_sales(
    orders: Iterable[tuple[datetime, Decimal]], days: int, today: date
) -> list[dict[str, Any]]:
    """Sum order amounts per UTC day over the last `days` days, oldest first.

    Every day in the window is present; days without sales total zero.
    """
    first = today - timedelta(days=days - 1)
    totals = {first + timedelta(days=n): Decimal("0") for n in range(days)}
    for created_at, amount in orders:
        if created_at.tzinfo is not None:
            created_at = created_at.astimezone(UTC)
        day = created_at.date()
        if day in totals:
            totals[day] += Decimal(amount)
    return [{"day": day, "total": total} for day, total in totals.items()]


class DashboardQueries:
    def __init__(self, repo: DashboardRepository, cache: CacheProtocol | None = None) -> None:
        self.repo = repo
        self.cache = cache

    @cached("dashboard", ttl=DASHBOARD_CACHE_TTL, tags=(TAG_ORDERS, TAG_PRODUCTS, TAG_USERS))
    async def get_dashboard(self, params: DashboardParams) -> dict[str, Any]:
        today = datetime.now(UTC).date()
        since = datetime.combine(today - timedelta(days=params.days - 1), time.min, tzinfo=UTC)
        totals = await self.repo.count_totals()
        overview = DashboardResponse(
            total_revenue=await self.repo.paid_revenue(),
            total_products=totals["products"],
            total_orders=totals["orders"],
            total_users=totals["users"],
            sales_overview=daily_sales(
                await self.repo.paid_orders_since(since), params.days, today
            ),
            recent_sales=await self.repo.recent_orders(params.recent),
            top_products=[
                TopProduct.model_validate(product, from_attributes=True)
                for product in await self.repo.top_products(TOP_PRODUCTS_LIMIT)
            ],
        )
        return overview.model_dump(mode="json")
