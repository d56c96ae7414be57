"""Cached order reads."""

from typing import Any

from storefront.core.constants import TAG_ORDERS, record_tag
from storefront.infrastructure.cache.cache_protocol import CacheProtocol
from storefront.infrastructure.cache.decorators import cached
from storefront.infrastructure.persistence.queries._pages import to_json, to_page
from storefront.infrastructure.persistence.repositories.order_repo import OrderRepository
from storefront.schemas.order import (
    OrderDetailResponse,
    OrderItemResponse,
    OrderListParams,
    OrderResponse,
)


class OrderQueries:
    def __init__(self, repo: OrderRepository, cache: CacheProtocol | None = None) -> None:
        self.repo = repo
        self.cache = cache

    @cached("orders", tags=(TAG_ORDERS,))
    async def get_orders(self, params: OrderListParams) -> dict[str, Any]:
        rows, total = await self.repo.list_orders(params)
        return to_page(OrderResponse, rows, total, params.per_page)

    @cached("order", tags=lambda order_id: [TAG_ORDERS, record_tag("order", order_id)])
    async def get_order(self, order_id: str) -> dict[str, Any] | None:
        """Return the order with its line items, or None."""
        order = await self.repo.get_by_id(order_id)
        if order is None:
            return None
        detail = to_json(OrderDetailResponse, order)
        detail["items"] = [
            to_json(OrderItemResponse, item) for item in await self.repo.list_items(order_id)
        ]
        return detail
