"""Order actions: orders are written together with their line items."""

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from storefront.application.actions.guards import require_admin
from storefront.application.actions.resource import (
    ActionResult,
    action,
    delete_multiple,
    delete_single,
    parse_input,
    take_first,
)
from storefront.application.dtos.user import UserResult
from storefront.application.interfaces.repositories import IOrderRepository
from storefront.application.interfaces.services import ICacheInvalidator
from storefront.core.constants import TAG_ORDERS, record_tag
from storefront.domain.exceptions import ValidationException
from storefront.schemas.order import (
    OrderCreateRequest,
    OrdersDeleteRequest,
    OrdersUpdateRequest,
    OrderUpdateRequest,
)
from storefront.shared.utils.generators import generate_order_number


class OrderActions:
    """Mutations on orders (admin only).

    Deleting an order removes its items in the same transaction.
    """

    def __init__(self, repo: IOrderRepository, cache: ICacheInvalidator) -> None:
        self.repo = repo
        self.cache = cache

    def _admin(self, principal: UserResult | None) -> UserResult:
        return require_admin(
            principal,
            "You must be logged in to manage orders",
            "You don't have permission to manage orders",
        )

    async def _invalidate(self, order_ids: Sequence[str] = ()) -> None:
        await self.cache.invalidate(TAG_ORDERS)
        for order_id in order_ids:
            await self.cache.invalidate(record_tag("order", order_id))

    async def _delete_items(self, order_ids: Sequence[str]) -> None:
        await self.repo.delete_items_for_orders(order_ids)

    @action
    async def create_order(
        self, principal: UserResult | None, payload: OrderCreateRequest | dict[str, Any]
    ) -> Any:
        self._admin(principal)
        data = parse_input(OrderCreateRequest, payload)
        order_number = data.order_number or generate_order_number()
        if await self.repo.get_by_order_number(order_number) is not None:
            raise ValidationException(
                "An order with this number already exists", field="order_number"
            )
        values = data.model_dump(mode="json", exclude={"items"})
        values["order_number"] = order_number
        values["total_amount"] = Decimal(data.total_amount)
        items = [
            {
                "product_id": item.product_id,
                "quantity": item.quantity,
                "unit_price": Decimal(item.unit_price),
                "total_price": Decimal(item.total_price),
            }
            for item in data.items
        ]
        async with self.repo.transaction():
            order = await self.repo.create_order(values, items)
        await self._invalidate()
        return order

    @action
    async def update_order(
        self,
        principal: UserResult | None,
        order_id: str,
        payload: OrderUpdateRequest | dict[str, Any],
    ) -> Any:
        self._admin(principal)
        data = parse_input(OrderUpdateRequest, payload)
        values = data.model_dump(mode="json", exclude_unset=True)
        if not values:
            order = await self.repo.get_by_id(order_id)
        else:
            order = take_first(await self.repo.update_by_key(order_id, values))
        if order is None:
            raise ValidationException("Order not found", field="id")
        await self._invalidate([order_id])
        return order

    @action
    async def update_orders(
        self, principal: UserResult | None, payload: OrdersUpdateRequest | dict[str, Any]
    ) -> list[Any]:
        self._admin(principal)
        data = parse_input(OrdersUpdateRequest, payload)
        values = data.model_dump(mode="json", exclude={"ids"}, exclude_none=True)
        if not values:
            return []
        updated = await self.repo.update_by_key_set(data.ids, values)
        await self._invalidate(data.ids)
        return updated

    @action
    async def delete_order(self, principal: UserResult | None, order_id: str) -> ActionResult[Any]:
        self._admin(principal)

        async def delete_items(resource_id: str) -> None:
            await self._delete_items([resource_id])

        result = await delete_single(
            self.repo,
            order_id,
            revalidate_tag=TAG_ORDERS,
            cache=self.cache,
            pre_delete=delete_items,
        )
        if result.ok and order_id:
            await self.cache.invalidate(record_tag("order", order_id))
        return result

    @action
    async def delete_orders(
        self, principal: UserResult | None, payload: OrdersDeleteRequest | dict[str, Any]
    ) -> ActionResult[list[Any]]:
        self._admin(principal)
        data = parse_input(OrdersDeleteRequest, payload)
        return await delete_multiple(
            self.repo,
            data.ids,
            revalidate_tag=TAG_ORDERS,
            cache=self.cache,
            pre_delete=self._delete_items,
        )
