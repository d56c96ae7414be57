"""Setting actions: single and bulk edits, upsert by key, per-category updates."""

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
from storefront.application.interfaces.repositories import ISettingRepository
from storefront.application.interfaces.services import ICacheInvalidator
from storefront.core.constants import TAG_SETTINGS
from storefront.domain.exceptions import ValidationException
from storefront.schemas.setting import (
    SettingByKeyRequest,
    SettingCreateRequest,
    SettingsByCategoryRequest,
    SettingsDeleteRequest,
    SettingsUpdateRequest,
    SettingUpdateRequest,
)

DUPLICATE_KEY_MESSAGE = "Setting with this key already exists"


class SettingActions:
    """Mutations on store settings (admin only).

    The acting admin is recorded in updated_by on every write.
    """

    def __init__(self, repo: ISettingRepository, cache: ICacheInvalidator) -> None:
        self.repo = repo
        self.cache = cache

    def _admin(self, principal: UserResult | None) -> UserResult:
        return require_admin(
            principal,
            "You must be logged in to manage settings",
            "You don't have permission to manage settings",
        )

    @action
    async def create_setting(
        self, principal: UserResult | None, payload: SettingCreateRequest | dict[str, Any]
    ) -> Any:
        admin = self._admin(principal)
        data = parse_input(SettingCreateRequest, payload)
        if await self.repo.get_by_key(data.key) is not None:
            raise ValidationException(DUPLICATE_KEY_MESSAGE, field="key")
        values = data.model_dump(mode="json")
        values["updated_by"] = admin.id
        setting = await self.repo.create_setting(values)
        await self.cache.invalidate(TAG_SETTINGS)
        return setting

    @action
    async def update_setting(
        self,
        principal: UserResult | None,
        setting_id: str,
        payload: SettingUpdateRequest | dict[str, Any],
    ) -> Any:
        admin = self._admin(principal)
        data = parse_input(SettingUpdateRequest, payload)
        values = data.model_dump(mode="json", exclude_unset=True)
        values["updated_by"] = admin.id
        setting = take_first(await self.repo.update_by_key(setting_id, values))
        if setting is None:
            raise ValidationException("Setting not found", field="id")
        await self.cache.invalidate(TAG_SETTINGS)
        return setting

    @action
    async def update_setting_by_key(
        self, principal: UserResult | None, payload: SettingByKeyRequest | dict[str, Any]
    ) -> Any:
        """Set the value of key, creating a private general setting when it is new."""
        admin = self._admin(principal)
        data = parse_input(SettingByKeyRequest, payload)
        setting = await self.repo.upsert_by_key(
            data.key, {"value": data.value, "updated_by": admin.id}
        )
        await self.cache.invalidate(TAG_SETTINGS)
        return setting

    @action
    async def update_settings(
        self, principal: UserResult | None, payload: SettingsUpdateRequest | dict[str, Any]
    ) -> list[Any]:
        admin = self._admin(principal)
        data = parse_input(SettingsUpdateRequest, payload)
        values = data.model_dump(mode="json", exclude={"ids"}, exclude_none=True)
        if not values:
            return []
        values["updated_by"] = admin.id
        updated = await self.repo.update_by_key_set(data.ids, values)
        await self.cache.invalidate(TAG_SETTINGS)
        return updated

    @action
    async def update_settings_by_category(
        self, principal: UserResult | None, payload: SettingsByCategoryRequest | dict[str, Any]
    ) -> list[Any]:
        """Update several values of one category at once; unknown keys are skipped."""
        admin = self._admin(principal)
        data = parse_input(SettingsByCategoryRequest, payload)
        async with self.repo.transaction():
            updated = await self.repo.update_values_in_category(
                data.category.value, data.updates, admin.id
            )
        await self.cache.invalidate(TAG_SETTINGS)
        return updated

    @action
    async def delete_setting(
        self, principal: UserResult | None, setting_id: str
    ) -> ActionResult[Any]:
        self._admin(principal)
        return await delete_single(
            self.repo, setting_id, revalidate_tag=TAG_SETTINGS, cache=self.cache
        )

    @action
    async def delete_settings(
        self, principal: UserResult | None, payload: SettingsDeleteRequest | dict[str, Any]
    ) -> ActionResult[list[Any]]:
        self._admin(principal)
        data = parse_input(SettingsDeleteRequest, payload)
        return await delete_multiple(
            self.repo, data.ids, revalidate_tag=TAG_SETTINGS, cache=self.cache
        )
