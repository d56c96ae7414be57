"""Repositories: data access over the async session (one per resource type)."""

from storefront.infrastructure.persistence.repositories.base import BaseRepository
from storefront.infrastructure.persistence.repositories.category_repo import (
    CategoryRepository,
)
from storefront.infrastructure.persistence.repositories.dashboard_repo import (
    DashboardRepository,
)
from storefront.infrastructure.persistence.repositories.order_repo import OrderRepository
from storefront.infrastructure.persistence.repositories.product_repo import (
    ProductRepository,
)
from storefront.infrastructure.persistence.repositories.setting_repo import (
    SettingRepository,
)
from storefront.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "DashboardRepository",
    "OrderRepository",
    "ProductRepository",
    "SettingRepository",
    "UserRepository",
]
