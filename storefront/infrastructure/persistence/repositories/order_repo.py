"""Order repository: orders with their line items."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.infrastructure.persistence.models.order import Order, OrderItem
from storefront.infrastructure.persistence.repositories._sorting import apply_sort
from storefront.infrastructure.persistence.repositories.base import BaseRepository
from storefront.schemas.order import OrderListParams

_SORTABLE = frozenset(
    {"order_number", "status", "payment_status", "total_amount", "created_at", "updated_at"}
)


class OrderRepository(BaseRepository[Order]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Order)

    async def create_order(
        self, values: dict[str, Any], items: Sequence[dict[str, Any]]
    ) -> Order:
        """Insert the order, then its items (caller provides the transaction)."""
        order = await self.create(Order(**values))
        self.db.add_all(OrderItem(order_id=order.id, **item) for item in items)
        await self.db.flush()
        return order

    async def get_by_order_number(self, order_number: str) -> Order | None:
        result = await self.db.execute(
            select(Order).where(Order.order_number == order_number)
        )
        return result.scalar_one_or_none()

    async def list_items(self, order_id: str) -> list[OrderItem]:
        result = await self.db.execute(
            select(OrderItem)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.created_at, OrderItem.id)
        )
        return list(result.scalars().all())

    async def list_orders(self, params: OrderListParams) -> tuple[list[Order], int]:
        stmt = select(Order)
        if params.order_number:
            stmt = stmt.where(Order.order_number.ilike(f"%{params.order_number}%"))
        if params.status is not None:
            stmt = stmt.where(Order.status == params.status.value)
        if params.payment_status is not None:
            stmt = stmt.where(Order.payment_status == params.payment_status.value)
        field, descending = params.sort_field()
        stmt = apply_sort(stmt, Order, field, descending, _SORTABLE)
        return await self.paginate(stmt, params.page, params.per_page)

    async def delete_items_for_orders(self, order_ids: Sequence[str]) -> int:
        """Delete the items of these orders; return rows deleted."""
        result = await self.db.execute(
            delete(OrderItem)
            .where(OrderItem.order_id.in_(list(order_ids)))
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)
