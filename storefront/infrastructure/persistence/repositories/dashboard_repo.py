"""Dashboard repository: aggregate reads across orders, products and users."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domain.enums import PaymentStatus
from storefront.infrastructure.persistence.models.order import Order
from storefront.infrastructure.persistence.models.product import Product
from storefront.infrastructure.persistence.models.user import User

_PAID = Order.payment_status == PaymentStatus.PAID.value


class DashboardRepository:
    """Read-only aggregates; owns no model of its own."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def count_totals(self) -> dict[str, int]:
        """Return row counts for products, orders and users in one round trip."""
        result = await self.db.execute(
            select(
                select(func.count(Product.id)).scalar_subquery(),
                select(func.count(Order.id)).scalar_subquery(),
                select(func.count(User.id)).scalar_subquery(),
            )
        )
        products, orders, users = result.one()
        return {"products": int(products), "orders": int(orders), "users": int(users)}

    async def paid_revenue(self) -> Decimal:
        result = await self.db.execute(
            select(func.coalesce(func.sum(Order.total_amount), 0)).where(_PAID)
        )
        return Decimal(str(result.scalar_one()))

    async def paid_orders_since(self, since: datetime) -> list[tuple[datetime, Decimal]]:
        """Return (created_at, total_amount) of paid orders created at or after since."""
        result = await self.db.execute(
            select(Order.created_at, Order.total_amount)
            .where(_PAID, Order.created_at >= since)
            .order_by(Order.created_at)
        )
        return [(created_at, amount) for created_at, amount in result.all()]

    async def recent_orders(self, limit: int) -> list[dict[str, Any]]:
        """Return the newest orders with the customer's name and email when known."""
        result = await self.db.execute(
            select(
                Order.id,
                Order.order_number,
                User.name.label("customer_name"),
                User.email.label("customer_email"),
                Order.total_amount.label("amount"),
                Order.status,
                Order.created_at,
            )
            .outerjoin(User, User.id == Order.user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(limit)
        )
        return [dict(row) for row in result.mappings().all()]

    async def top_products(self, limit: int) -> list[Product]:
        """Return the most downloaded products, ties broken by title."""
        result = await self.db.execute(
            select(Product)
            .order_by(Product.download_count.desc(), Product.title)
            .limit(limit)
        )
        return list(result.scalars().all())
