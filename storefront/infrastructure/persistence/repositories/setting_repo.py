"""Setting repository: key lookups, upsert and per-category updates."""

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domain.exceptions import ResourceAlreadyExistsException
from storefront.infrastructure.persistence.models.setting import Setting
from storefront.infrastructure.persistence.repositories._sorting import apply_sort
from storefront.infrastructure.persistence.repositories.base import BaseRepository
from storefront.schemas.setting import SettingListParams

_SORTABLE = frozenset({"key", "category", "is_public", "created_at", "updated_at"})


class SettingRepository(BaseRepository[Setting]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Setting)

    async def create_setting(self, values: dict[str, Any]) -> Setting:
        """Insert a setting; a key collision raises ResourceAlreadyExistsException."""
        try:
            async with self.db.begin_nested():
                return await self.create(Setting(**values))
        except IntegrityError as e:
            raise ResourceAlreadyExistsException(
                "setting", "key", str(values.get("key", ""))
            ) from e

    async def get_by_key(self, key: str) -> Setting | None:
        result = await self.db.execute(select(Setting).where(Setting.key == key))
        return result.scalar_one_or_none()

    async def upsert_by_key(self, key: str, values: dict[str, Any]) -> Setting:
        """Update the setting with this key, inserting it (category general) when missing."""
        existing = await self.get_by_key(key)
        if existing is None:
            return await self.create_setting({"key": key, **values})
        rows = await self.update_by_key(existing.id, values)
        return rows[0]

    async def update_values_in_category(
        self, category: str, values: dict[str, Any], updated_by: str | None
    ) -> list[Setting]:
        """Set value for each key of values that exists in category.

        Keys that do not exist (or belong to another category) are skipped.
        """
        updated: list[Setting] = []
        for key, value in values.items():
            result = await self.db.execute(
                update(Setting)
                .where(Setting.key == key, Setting.category == category)
                .values(value=value, updated_by=updated_by)
                .returning(Setting)
                .execution_options(populate_existing=True)
            )
            updated.extend(result.scalars().all())
        return updated

    async def list_settings(self, params: SettingListParams) -> tuple[list[Setting], int]:
        stmt = select(Setting)
        if params.key:
            stmt = stmt.where(Setting.key.ilike(f"%{params.key}%"))
        if params.category is not None:
            stmt = stmt.where(Setting.category == params.category.value)
        if params.is_public is not None:
            stmt = stmt.where(Setting.is_public.is_(params.is_public))
        field, descending = params.sort_field()
        stmt = apply_sort(stmt, Setting, field, descending, _SORTABLE, fallback="key")
        return await self.paginate(stmt, params.page, params.per_page)

    async def list_public(self) -> list[Setting]:
        result = await self.db.execute(
            select(Setting).where(Setting.is_public.is_(True)).order_by(Setting.key)
        )
        return list(result.scalars().all())
