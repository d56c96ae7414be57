"""Admin dashboard API: one cached overview of sales and catalog totals."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from storefront.api.dependencies import AdminUser, get_dashboard_queries
from storefront.infrastructure.persistence.queries import DashboardQueries
from storefront.schemas.dashboard import DashboardParams, DashboardResponse

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    params: Annotated[DashboardParams, Query()],
    admin: AdminUser,
    queries: Annotated[DashboardQueries, Depends(get_dashboard_queries)],
) -> Any:
    """Revenue from paid orders, totals, daily sales for `days` days and recent orders."""
    return await queries.get_dashboard(params)
