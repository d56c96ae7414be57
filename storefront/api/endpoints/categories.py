"""Category API: public reads, admin writes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from storefront.api.dependencies import (
    AdminUser,
    OptionalUser,
    get_category_actions,
    get_category_queries,
)
from storefront.api.responses import action_response
from storefront.application.actions import CategoryActions
from storefront.core.limiter import limit_writes
from storefront.infrastructure.persistence.queries import CategoryQueries
from storefront.schemas.category import (
    CategoriesDeleteRequest,
    CategoriesUpdateRequest,
    CategoryCreateRequest,
    CategoryListParams,
    CategoryResponse,
    CategoryUpdateRequest,
)
from storefront.schemas.common import Page

router = APIRouter()

Actions = Annotated[CategoryActions, Depends(get_category_actions)]
Queries = Annotated[CategoryQueries, Depends(get_category_queries)]


@router.get("", response_model=Page[CategoryResponse])
async def list_categories(
    params: Annotated[CategoryListParams, Query()],
    user: OptionalUser,
    queries: Queries,
) -> Any:
    if user is None or not user.is_admin:
        params = params.model_copy(update={"is_active": True})
    return await queries.get_categories(params)


@router.get("/counts", response_model=dict[str, int])
async def category_counts(queries: Queries) -> Any:
    """Number of products per category label."""
    return await queries.get_category_counts()


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str, queries: Queries) -> Any:
    category = await queries.get_category_by_id(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("")
@limit_writes
async def create_category(
    request: Request, body: CategoryCreateRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.create_category(admin, body), CategoryResponse)


@router.put("/{category_id}")
@limit_writes
async def update_category(
    request: Request,
    category_id: str,
    body: CategoryUpdateRequest,
    admin: AdminUser,
    actions: Actions,
):
    return action_response(
        await actions.update_category(admin, category_id, body), CategoryResponse
    )


@router.delete("/{category_id}")
@limit_writes
async def delete_category(
    request: Request, category_id: str, admin: AdminUser, actions: Actions
):
    """Delete one category; its products are kept without a category."""
    return action_response(await actions.delete_category(admin, category_id), CategoryResponse)


@router.post("/bulk-delete")
@limit_writes
async def delete_categories(
    request: Request, body: CategoriesDeleteRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.delete_categories(admin, body), CategoryResponse)


@router.post("/bulk-update")
@limit_writes
async def update_categories(
    request: Request, body: CategoriesUpdateRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.update_categories(admin, body), CategoryResponse)
