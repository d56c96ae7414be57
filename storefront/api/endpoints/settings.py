"""Settings API: public key/value map, admin CRUD."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from storefront.api.dependencies import (
    AdminUser,
    get_setting_actions,
    get_setting_queries,
)
from storefront.api.responses import action_response
from storefront.application.actions import SettingActions
from storefront.core.limiter import limit_writes
from storefront.infrastructure.persistence.queries import SettingQueries
from storefront.schemas.common import Page
from storefront.schemas.setting import (
    SettingByKeyRequest,
    SettingCreateRequest,
    SettingListParams,
    SettingResponse,
    SettingsByCategoryRequest,
    SettingsDeleteRequest,
    SettingsUpdateRequest,
    SettingUpdateRequest,
)

router = APIRouter()

Actions = Annotated[SettingActions, Depends(get_setting_actions)]
Queries = Annotated[SettingQueries, Depends(get_setting_queries)]


@router.get("/public", response_model=dict[str, Any])
async def public_settings(queries: Queries) -> Any:
    """Settings flagged is_public, as {key: value}. No authentication."""
    return await queries.get_public_settings()


@router.get("", response_model=Page[SettingResponse])
async def list_settings(
    params: Annotated[SettingListParams, Query()], admin: AdminUser, queries: Queries
) -> Any:
    return await queries.get_settings(params)


@router.get("/by-key/{key}", response_model=SettingResponse)
async def get_setting_by_key(key: str, admin: AdminUser, queries: Queries) -> Any:
    setting = await queries.get_setting_by_key(key)
    if setting is None:
        raise HTTPException(status_code=404, detail="Setting not found")
    return setting


@router.post("")
@limit_writes
async def create_setting(
    request: Request, body: SettingCreateRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.create_setting(admin, body), SettingResponse)


@router.put("/by-key")
@limit_writes
async def update_setting_by_key(
    request: Request, body: SettingByKeyRequest, admin: AdminUser, actions: Actions
):
    """Set one value by key, creating the setting when it does not exist."""
    return action_response(await actions.update_setting_by_key(admin, body), SettingResponse)


@router.put("/by-category")
@limit_writes
async def update_settings_by_category(
    request: Request, body: SettingsByCategoryRequest, admin: AdminUser, actions: Actions
):
    return action_response(
        await actions.update_settings_by_category(admin, body), SettingResponse
    )


@router.put("/{setting_id}")
@limit_writes
async def update_setting(
    request: Request,
    setting_id: str,
    body: SettingUpdateRequest,
    admin: AdminUser,
    actions: Actions,
):
    return action_response(
        await actions.update_setting(admin, setting_id, body), SettingResponse
    )


@router.delete("/{setting_id}")
@limit_writes
async def delete_setting(
    request: Request, setting_id: str, admin: AdminUser, actions: Actions
):
    return action_response(await actions.delete_setting(admin, setting_id), SettingResponse)


@router.post("/bulk-delete")
@limit_writes
async def delete_settings(
    request: Request, body: SettingsDeleteRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.delete_settings(admin, body), SettingResponse)


@router.post("/bulk-update")
@limit_writes
async def update_settings(
    request: Request, body: SettingsUpdateRequest, admin: AdminUser, actions: Actions
):
    return action_response(await actions.update_settings(admin, body), SettingResponse)
