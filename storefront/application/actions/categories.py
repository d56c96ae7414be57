"""Category actions. Every change also drops the per-category product counts."""

from collections.abc import Sequence
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
from storefront.application.interfaces.repositories import ICategoryRepository
from storefront.application.interfaces.services import ICacheInvalidator
from storefront.core.constants import TAG_CATEGORIES, TAG_CATEGORY_COUNTS, TAG_PRODUCTS
from storefront.domain.exceptions import ResourceAlreadyExistsException, ValidationException
from storefront.schemas.category import (
    CategoriesDeleteRequest,
    CategoriesUpdateRequest,
    CategoryCreateRequest,
    CategoryUpdateRequest,
)
from storefront.shared.utils.text import slugify


class CategoryActions:
    def __init__(self, repo: ICategoryRepository, cache: ICacheInvalidator) -> None:
        self.repo = repo
        self.cache = cache

    def _admin(self, principal: UserResult | None) -> UserResult:
        return require_admin(
            principal,
            "You must be logged in to manage categories",
            "You don't have permission to manage categories",
        )

    async def _invalidate(self) -> None:
        await self.cache.invalidate(TAG_CATEGORIES)
        await self.cache.invalidate(TAG_CATEGORY_COUNTS)

    async def _ensure_slug_free(self, slug: str, category_id: str | None = None) -> None:
        existing = await self.repo.get_by_slug(slug)
        if existing is not None and existing.id != category_id:
            raise ResourceAlreadyExistsException("category", "slug", slug)

    async def _detach_products(self, category_ids: Sequence[str]) -> None:
        if await self.repo.detach_products(category_ids):
            await self.cache.invalidate(TAG_PRODUCTS)

    @action
    async def create_category(
        self, principal: UserResult | None, payload: CategoryCreateRequest | dict[str, Any]
    ) -> Any:
        self._admin(principal)
        data = parse_input(CategoryCreateRequest, payload)
        values = data.model_dump()
        values["slug"] = data.slug or slugify(data.name)
        if not values["slug"]:
            raise ValidationException("Slug is required", field="slug")
        await self._ensure_slug_free(values["slug"])
        category = await self.repo.create_category(values)
        await self._invalidate()
        return category

    @action
    async def update_category(
        self,
        principal: UserResult | None,
        category_id: str,
        payload: CategoryUpdateRequest | dict[str, Any],
    ) -> Any:
        """Apply a partial update. Renaming regenerates the slug unless one is given."""
        self._admin(principal)
        data = parse_input(CategoryUpdateRequest, payload)
        values = data.model_dump(exclude_unset=True)
        if data.name is not None and not data.slug:
            values["slug"] = slugify(data.name)
        if values.get("slug"):
            await self._ensure_slug_free(values["slug"], category_id)
        if not values:
            category = await self.repo.get_by_id(category_id)
        else:
            category = take_first(await self.repo.update_by_key(category_id, values))
        if category is None:
            raise ValidationException("Category not found", field="id")
        await self._invalidate()
        return category

    @action
    async def update_categories(
        self, principal: UserResult | None, payload: CategoriesUpdateRequest | dict[str, Any]
    ) -> list[Any]:
        self._admin(principal)
        data = parse_input(CategoriesUpdateRequest, payload)
        values = data.model_dump(exclude={"ids"}, exclude_none=True)
        if not values:
            return []
        updated = await self.repo.update_by_key_set(data.ids, values)
        await self._invalidate()
        return updated

    @action
    async def delete_category(
        self, principal: UserResult | None, category_id: str
    ) -> ActionResult[Any]:
        """Delete one category; its products stay, uncategorized."""
        self._admin(principal)

        async def detach(resource_id: str) -> None:
            await self._detach_products([resource_id])

        result = await delete_single(
            self.repo,
            category_id,
            revalidate_tag=TAG_CATEGORIES,
            cache=self.cache,
            pre_delete=detach,
        )
        if result.ok:
            await self.cache.invalidate(TAG_CATEGORY_COUNTS)
        return result

    @action
    async def delete_categories(
        self, principal: UserResult | None, payload: CategoriesDeleteRequest | dict[str, Any]
    ) -> ActionResult[list[Any]]:
        self._admin(principal)
        data = parse_input(CategoriesDeleteRequest, payload)
        result = await delete_multiple(
            self.repo,
            data.ids,
            revalidate_tag=TAG_CATEGORIES,
            cache=self.cache,
            pre_delete=self._detach_products,
        )
        if result.ok:
            await self.cache.invalidate(TAG_CATEGORY_COUNTS)
        return result
