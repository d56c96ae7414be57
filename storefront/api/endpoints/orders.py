"""Order API (admin only)."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from storefront.api.dependencies import (
    AdminUser,
    get_order_actions,
    get_order_queries,
)
from storefront.api.responses import action_response
from storefront.application.actions import OrderActions
from storefront.core.limiter import limit_writes
from storefront.infrastructure.persistence.queries import OrderQueries
from storefront.schemas.common import Page
from storefront.schemas.order import (
    OrderCreateRequest,
    OrderDetailResponse,
    OrderListParams,
    OrderResponse,
    OrdersDeleteRequest,
    OrdersUpdateRequest,
    OrderUpdateRequest,
)

router = APIRouter()

Actions = Annotated[OrderActions, Depends(get_order_actions)]
Queries = Annotated[OrderQueries, Depends(get_order_queries)]


@router.get("", response_model=Page[OrderResponse])
async def list_orders(
    params: Annotated[OrderListParams, Query()], admin: AdminUser, queries: Queries
) -> Any:
    return await queries.get_orders(params)


@router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order(order_id: str, admin: AdminUser, queries: Queries) -> Any:
    """Order with its line items."""
    order = await queries.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.post("")
@limit_writes
async def create_order(
    request: Request, body: OrderCreateRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.create_order(admin, body), OrderResponse)


@router.put("/{order_id}")
@limit_writes
async def update_order(
    request: Request,
    order_id: str,
    body: OrderUpdateRequest,
    admin: AdminUser,
    actions: Actions,
):
    return action_response(await actions.update_order(admin, order_id, body), OrderResponse)


@router.delete("/{order_id}")
@limit_writes
async def delete_order(request: Request, order_id: str, admin: AdminUser, actions: Actions):
    return action_response(await actions.delete_order(admin, order_id), OrderResponse)


@router.post("/bulk-delete")
@limit_writes
async def delete_orders(
    request: Request, body: OrdersDeleteRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.delete_orders(admin, body), OrderResponse)


@router.post("/bulk-update")
@limit_writes
async def update_orders(
    request: Request, body: OrdersUpdateRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.update_orders(admin, body), OrderResponse)
