"""Category repository."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domain.exceptions import ResourceAlreadyExistsException
from storefront.infrastructure.persistence.models.category import Category
from storefront.infrastructure.persistence.models.product import Product
from storefront.infrastructure.persistence.repositories._sorting import apply_sort
from storefront.infrastructure.persistence.repositories.base import BaseRepository
from storefront.schemas.category import CategoryListParams

_SORTABLE = frozenset({"name", "slug", "is_active", "sort_order", "created_at", "updated_at"})


class CategoryRepository(BaseRepository[Category]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Category)

    async def create_category(self, values: dict[str, Any]) -> Category:
        """Insert a category; a name/slug collision raises ResourceAlreadyExistsException."""
        try:
            async with self.db.begin_nested():
                return await self.create(Category(**values))
        except IntegrityError as e:
            raise ResourceAlreadyExistsException(
                "category", "slug", str(values.get("slug", ""))
            ) from e

    async def get_by_slug(self, slug: str) -> Category | None:
        result = await self.db.execute(select(Category).where(Category.slug == slug))
        return result.scalar_one_or_none()

    async def list_categories(
        self, params: CategoryListParams
    ) -> tuple[list[Category], int]:
        stmt = select(Category)
        if params.name:
            stmt = stmt.where(Category.name.ilike(f"%{params.name}%"))
        if params.is_active is not None:
            stmt = stmt.where(Category.is_active.is_(params.is_active))
        field, descending = params.sort_field()
        stmt = apply_sort(stmt, Category, field, descending, _SORTABLE, fallback="sort_order")
        return await self.paginate(stmt, params.page, params.per_page)

    async def detach_products(self, category_ids: Sequence[str]) -> int:
        """Clear category_id on products of these categories; return rows touched."""
        result = await self.db.execute(
            update(Product)
            .where(Product.category_id.in_(list(category_ids)))
            .values(category_id=None)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)
