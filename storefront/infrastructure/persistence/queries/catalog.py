"""Cached catalog reads: products, categories and per-category counts."""

from typing import Any

from storefront.core.constants import (
    TAG_CATEGORIES,
    TAG_CATEGORY_COUNTS,
    TAG_PRODUCTS,
    record_tag,
)
from storefront.infrastructure.cache.cache_protocol import CacheProtocol
from storefront.infrastructure.cache.decorators import cached
from storefront.infrastructure.persistence.queries._pages import to_json, to_page
from storefront.infrastructure.persistence.repositories.category_repo import (
    CategoryRepository,
)
from storefront.infrastructure.persistence.repositories.product_repo import (
    ProductRepository,
)
from storefront.schemas.category import CategoryListParams, CategoryResponse
from storefront.schemas.product import ProductListParams, ProductResponse


def _product_tags(product_id: str) -> list[str]:
    return [TAG_PRODUCTS, record_tag("product", product_id)]


class ProductQueries:
    """Product reads cached under the products tag (and product-<id> for one record)."""

    def __init__(self, repo: ProductRepository, cache: CacheProtocol | None = None) -> None:
        self.repo = repo
        self.cache = cache

    @cached("products", tags=(TAG_PRODUCTS,))
    async def get_products(self, params: ProductListParams) -> dict[str, Any]:
        rows, total = await self.repo.list_products(params)
        return to_page(ProductResponse, rows, total, params.per_page)

    @cached("product", tags=_product_tags)
    async def get_product_by_id(self, product_id: str) -> dict[str, Any] | None:
        product = await self.repo.get_by_id(product_id)
        return to_json(ProductResponse, product) if product else None


class CategoryQueries:
    def __init__(
        self,
        repo: CategoryRepository,
        products: ProductRepository,
        cache: CacheProtocol | None = None,
    ) -> None:
        self.repo = repo
        self.products = products
        self.cache = cache

    @cached("categories", tags=(TAG_CATEGORIES,))
    async def get_categories(self, params: CategoryListParams) -> dict[str, Any]:
        rows, total = await self.repo.list_categories(params)
        return to_page(CategoryResponse, rows, total, params.per_page)

    @cached("category", tags=(TAG_CATEGORIES,))
    async def get_category_by_id(self, category_id: str) -> dict[str, Any] | None:
        category = await self.repo.get_by_id(category_id)
        return to_json(CategoryResponse, category) if category else None

    @cached("category-counts", tags=(TAG_CATEGORY_COUNTS,))
    async def get_category_counts(self) -> dict[str, int]:
        """Return {category label: number of products}."""
        return await self.products.count_by_category()
