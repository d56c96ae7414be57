"""Persistence models: ORM entities and mixins."""

from storefront.infrastructure.persistence.models.category import Category
from storefront.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    TimestampMixin,
)
from storefront.infrastructure.persistence.models.order import Order, OrderItem
from storefront.infrastructure.persistence.models.product import Product
from storefront.infrastructure.persistence.models.setting import Setting
from storefront.infrastructure.persistence.models.user import User

__all__ = [
    "Category",
    "CreatedAtMixin",
    "CuidMixin",
    "Order",
    "OrderItem",
    "Product",
    "Setting",
    "TimestampMixin",
    "User",
]
