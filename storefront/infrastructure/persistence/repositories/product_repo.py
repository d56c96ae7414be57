"""Product repository: filtered listing and order-line checks."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.infrastructure.persistence.models.order import OrderItem
from storefront.infrastructure.persistence.models.product import Product
from storefront.infrastructure.persistence.repositories._sorting import apply_sort
from storefront.infrastructure.persistence.repositories.base import BaseRepository
from storefront.schemas.product import ProductListParams

_SORTABLE = frozenset(
    {"title", "price", "category", "download_count", "is_active", "created_at", "updated_at"}
)


class ProductRepository(BaseRepository[Product]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Product)

    async def create_product(self, values: dict[str, Any]) -> Product:
        return await self.create(Product(**values))

    async def list_products(self, params: ProductListParams) -> tuple[list[Product], int]:
        """Return one page of products matching the filters, and the total count."""
        stmt = select(Product)
        if params.title:
            stmt = stmt.where(Product.title.ilike(f"%{params.title}%"))
        if params.category:
            stmt = stmt.where(Product.category == params.category)
        if params.is_active is not None:
            stmt = stmt.where(Product.is_active.is_(params.is_active))
        field, descending = params.sort_field()
        stmt = apply_sort(stmt, Product, field, descending, _SORTABLE)
        return await self.paginate(stmt, params.page, params.per_page)

    async def count_order_items(self, product_ids: Sequence[str]) -> int:
        """Return how many order lines reference any of product_ids."""
        result = await self.db.execute(
            select(func.count(OrderItem.id)).where(
                OrderItem.product_id.in_(list(product_ids))
            )
        )
        return int(result.scalar_one())

    async def count_by_category(self) -> dict[str, int]:
        """Return product counts keyed by category label (uncategorized excluded)."""
        result = await self.db.execute(
            select(Product.category, func.count(Product.id))
            .where(Product.category.is_not(None))
            .group_by(Product.category)
        )
        return {category: int(count) for category, count in result.all()}

    async def increment_downloads(self, product_id: str) -> Product | None:
        """Atomically add one to download_count; return the product or None."""
        result = await self.db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(download_count=Product.download_count + 1)
            .returning(Product)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
