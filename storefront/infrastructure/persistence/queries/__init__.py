"""Read side: cached list/detail queries returning JSON-ready dicts."""

from storefront.infrastructure.persistence.queries.catalog import (
    CategoryQueries,
    ProductQueries,
)
from storefront.infrastructure.persistence.queries.dashboard import DashboardQueries
from storefront.infrastructure.persistence.queries.orders import OrderQueries
from storefront.infrastructure.persistence.queries.settings import SettingQueries
from storefront.infrastructure.persistence.queries.users import UserQueries

__all__ = [
    "CategoryQueries",
    "DashboardQueries",
    "OrderQueries",
    "ProductQueries",
    "SettingQueries",
    "UserQueries",
]
