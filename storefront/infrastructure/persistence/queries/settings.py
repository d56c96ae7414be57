"""Cached setting reads, including the public key/value map for storefront pages."""

from typing import Any

from storefront.core.constants import TAG_SETTINGS
from storefront.infrastructure.cache.cache_protocol import CacheProtocol
from storefront.infrastructure.cache.decorators import cached
from storefront.infrastructure.persistence.queries._pages import to_json, to_page
from storefront.infrastructure.persistence.repositories.setting_repo import (
    SettingRepository,
)
from storefront.schemas.setting import SettingListParams, SettingResponse


class SettingQueries:
    def __init__(self, repo: SettingRepository, cache: CacheProtocol | None = None) -> None:
        self.repo = repo
        self.cache = cache

    @cached("settings", tags=(TAG_SETTINGS,))
    async def get_settings(self, params: SettingListParams) -> dict[str, Any]:
        rows, total = await self.repo.list_settings(params)
        return to_page(SettingResponse, rows, total, params.per_page)

    @cached("setting", tags=(TAG_SETTINGS,))
    async def get_setting_by_key(self, key: str) -> dict[str, Any] | None:
        setting = await self.repo.get_by_key(key)
        return to_json(SettingResponse, setting) if setting else None

    @cached("public-settings", tags=(TAG_SETTINGS,))
    async def get_public_settings(self) -> dict[str, Any]:
        """Return {key: value} for settings flagged is_public."""
        return {s.key: s.value for s in await self.repo.list_public()}
