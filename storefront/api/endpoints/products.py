"""Product API.

Reads are public (inactive products are hidden from non-admins). Writes
sit behind the access-control middleware (admin only) and are delegated
to ProductActions, whose result is returned as {data, error}.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from storefront.api.dependencies import (
    OptionalUser,
    get_product_actions,
    get_product_queries,
)
from storefront.api.responses import action_response
from storefront.application.actions import ProductActions
from storefront.core.limiter import limit_writes
from storefront.infrastructure.persistence.queries import ProductQueries
from storefront.schemas.common import Page
from storefront.schemas.product import (
    ProductCreateRequest,
    ProductListParams,
    ProductResponse,
    ProductsDeleteRequest,
    ProductsUpdateRequest,
    ProductUpdateRequest,
)

router = APIRouter()

Actions = Annotated[ProductActions, Depends(get_product_actions)]
Queries = Annotated[ProductQueries, Depends(get_product_queries)]


@router.get("", response_model=Page[ProductResponse])
async def list_products(
    params: Annotated[ProductListParams, Query()],
    user: OptionalUser,
    queries: Queries,
) -> Any:
    """List products with paging, title search, category filter and sort."""
    if user is None or not user.is_admin:
        params = params.model_copy(update={"is_active": True})
    return await queries.get_products(params)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, user: OptionalUser, queries: Queries) -> Any:
    product = await queries.get_product_by_id(product_id)
    if product is None or (not product["is_active"] and not (user and user.is_admin)):
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("/{product_id}/download")
async def download_product(product_id: str, user: OptionalUser, actions: Actions):
    """Return a download URL for the product file and count the download."""
    return action_response(await actions.get_download_url(user, product_id))


@router.post("")
@limit_writes
async def create_product(
    request: Request, body: ProductCreateRequest, user: OptionalUser, actions: Actions
):
    return action_response(await actions.create_product(user, body), ProductResponse)


@router.put("/{product_id}")
@limit_writes
async def update_product(
    request: Request,
    product_id: str,
    body: ProductUpdateRequest,
    user: OptionalUser,
    actions: Actions,
):
    return action_response(await actions.update_product(user, product_id, body), ProductResponse)


@router.delete("/{product_id}")
@limit_writes
async def delete_product(request: Request, product_id: str, user: OptionalUser, actions: Actions):
    """Delete one product; refused while it appears on an order."""
    return action_response(await actions.delete_product(user, product_id), ProductResponse)


@router.post("/bulk-delete")
@limit_writes
async def delete_products(
    request: Request, body: ProductsDeleteRequest, user: OptionalUser, actions: Actions
):
    return action_response(await actions.delete_products(user, body), ProductResponse)


@router.post("/bulk-update")
@limit_writes
async def update_products(
    request: Request, body: ProductsUpdateRequest, user: OptionalUser, actions: Actions
):
    return action_response(await actions.update_products(user, body), ProductResponse)


@router.post("/{product_id}/toggle")
@limit_writes
async def toggle_product_status(
    request: Request, product_id: str, user: OptionalUser, actions: Actions
):
    return action_response(await actions.toggle_product_status(user, product_id), ProductResponse)
