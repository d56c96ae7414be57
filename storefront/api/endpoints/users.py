"""User API (admin only): thin routes delegating to UserActions / UserQueries."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from storefront.api.dependencies import AdminUser, get_user_actions, get_user_queries
from storefront.api.responses import action_response
from storefront.application.actions import UserActions
from storefront.core.limiter import limit_writes
from storefront.infrastructure.persistence.queries import UserQueries
from storefront.schemas.common import Page
from storefront.schemas.user import (
    UserCreateRequest,
    UserListParams,
    UserResponse,
    UsersDeleteRequest,
    UsersUpdateRequest,
    UserUpdateRequest,
)

router = APIRouter()

Actions = Annotated[UserActions, Depends(get_user_actions)]
Queries = Annotated[UserQueries, Depends(get_user_queries)]


@router.get("", response_model=Page[UserResponse])
async def list_users(
    params: Annotated[UserListParams, Query()], admin: AdminUser, queries: Queries
) -> Any:
    return await queries.get_users(params)


@router.get("/role-counts", response_model=dict[str, int])
async def user_role_counts(admin: AdminUser, queries: Queries) -> Any:
    return await queries.get_user_role_counts()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, admin: AdminUser, queries: Queries) -> Any:
    user = await queries.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("")
@limit_writes
async def create_user(
    request: Request, body: UserCreateRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.create_user(admin, body), UserResponse)


@router.put("/{user_id}")
@limit_writes
async def update_user(
    request: Request,
    user_id: str,
    body: UserUpdateRequest,
    admin: AdminUser,
    actions: Actions,
):
    return action_response(await actions.update_user(admin, user_id, body), UserResponse)


@router.delete("/{user_id}")
@limit_writes
async def delete_user(request: Request, user_id: str, admin: AdminUser, actions: Actions):
    """Delete one user. Admins cannot delete themselves."""
    return action_response(await actions.delete_user(admin, user_id), UserResponse)


@router.post("/bulk-delete")
@limit_writes
async def delete_users(
    request: Request, body: UsersDeleteRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.delete_users(admin, body), UserResponse)


@router.post("/bulk-update")
@limit_writes
async def update_users(
    request: Request, body: UsersUpdateRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.update_users(admin, body), UserResponse)
