"""Product actions: create, update, delete, bulk changes and status toggle."""

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from storefront.application.actions.guards import (
    require_admin,
    require_owner_or_admin,
    require_user,
)
from storefront.application.actions.resource import (
    ActionResult,
    action,
    delete_multiple,
    delete_single,
    parse_input,
    take_first,
)
from storefront.application.dtos.user import UserResult
from storefront.application.interfaces.repositories import IProductRepository
from storefront.application.interfaces.services import ICacheInvalidator, IFileStorage
from storefront.core.constants import TAG_CATEGORY_COUNTS, TAG_PRODUCTS, record_tag
from storefront.domain.exceptions import StorefrontException, ValidationException
from storefront.schemas.product import (
    ProductCreateRequest,
    ProductsDeleteRequest,
    ProductsUpdateRequest,
    ProductUpdateRequest,
)

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found"


class ProductActions:
    """Mutations on products.

    Creators may edit and delete their own products; bulk operations are
    admin-only. Deleting a product that appears on an order is refused
    (deactivate it instead); stored image/file objects are removed once the
    row is gone.
    """

    def __init__(
        self,
        repo: IProductRepository,
        cache: ICacheInvalidator,
        storage: IFileStorage | None = None,
    ) -> None:
        self.repo = repo
        self.cache = cache
        self.storage = storage

    async def _invalidate(self, product_ids: Sequence[str] = ()) -> None:
        await self.cache.invalidate(TAG_PRODUCTS)
        await self.cache.invalidate(TAG_CATEGORY_COUNTS)
        for product_id in product_ids:
            await self.cache.invalidate(record_tag("product", product_id))

    async def _get_owned(self, principal: UserResult, product_id: str, denied: str) -> Any:
        product = await self.repo.get_by_id(product_id)
        if product is None:
            raise ValidationException(PRODUCT_NOT_FOUND, field="id")
        require_owner_or_admin(principal, product.created_by, denied)
        return product

    async def _ensure_not_ordered(self, product_ids: Sequence[str]) -> None:
        if await self.repo.count_order_items(product_ids):
            raise ValidationException(
                "Products that appear on orders cannot be deleted; deactivate them instead",
                field="ids",
            )

    async def _remove_stored_files(self, products: Sequence[Any]) -> None:
        if self.storage is None:
            return
        for product in products:
            for url in (product.image_url, product.file_url):
                ref = self.storage.ref_for_url(url) if url else None
                if ref is None:
                    continue
                try:
                    await self.storage.delete(ref)
                except StorefrontException as e:
                    logger.warning("Could not remove %s of product %s: %s", ref, product.id, e)

    @action
    async def create_product(
        self, principal: UserResult | None, payload: ProductCreateRequest | dict[str, Any]
    ) -> Any:
        user = require_user(principal, "You must be logged in to create a product")
        data = parse_input(ProductCreateRequest, payload)
        values = data.model_dump()
        values["price"] = Decimal(data.price)
        values["created_by"] = user.id
        product = await self.repo.create_product(values)
        await self._invalidate()
        return product

    @action
    async def update_product(
        self,
        principal: UserResult | None,
        product_id: str,
        payload: ProductUpdateRequest | dict[str, Any],
    ) -> Any:
        user = require_user(principal, "You must be logged in to update a product")
        data = parse_input(ProductUpdateRequest, payload)
        await self._get_owned(user, product_id, "You don't have permission to update this product")
        values = data.model_dump(exclude_unset=True)
        if "price" in values and values["price"] is not None:
            values["price"] = Decimal(values["price"])
        if not values:
            return await self.repo.get_by_id(product_id)
        product = take_first(await self.repo.update_by_key(product_id, values))
        await self._invalidate([product_id])
        return product

    @action
    async def delete_product(self, principal: UserResult | None, product_id: str) -> ActionResult[Any]:
        user = require_user(principal, "You must be logged in to delete this product")
        await self._get_owned(user, product_id, "You don't have permission to delete this product")

        async def guard(resource_id: str) -> None:
            await self._ensure_not_ordered([resource_id])

        result = await delete_single(
            self.repo,
            product_id,
            revalidate_tag=TAG_PRODUCTS,
            cache=self.cache,
            pre_delete=guard,
        )
        if result.ok:
            await self.cache.invalidate(record_tag("product", product_id))
            await self.cache.invalidate(TAG_CATEGORY_COUNTS)
            if result.data is not None:
                await self._remove_stored_files([result.data])
        return result

    @action
    async def delete_products(
        self, principal: UserResult | None, payload: ProductsDeleteRequest | dict[str, Any]
    ) -> ActionResult[list[Any]]:
        require_admin(
            principal,
            "You must be logged in to delete products",
            "You don't have permission to delete products",
        )
        data = parse_input(ProductsDeleteRequest, payload)
        result = await delete_multiple(
            self.repo,
            data.ids,
            revalidate_tag=TAG_PRODUCTS,
            cache=self.cache,
            pre_delete=self._ensure_not_ordered,
        )
        if result.ok and result.data:
            await self._invalidate([p.id for p in result.data])
            await self._remove_stored_files(result.data)
        return result

    @action
    async def update_products(
        self, principal: UserResult | None, payload: ProductsUpdateRequest | dict[str, Any]
    ) -> list[Any]:
        require_admin(
            principal,
            "You must be logged in to update products",
            "You don't have permission to update products",
        )
        data = parse_input(ProductsUpdateRequest, payload)
        values = data.model_dump(exclude={"ids"}, exclude_none=True)
        if not values:
            return await self._existing(data.ids)
        updated = await self.repo.update_by_key_set(data.ids, values)
        await self._invalidate(data.ids)
        return updated

    async def _existing(self, product_ids: Sequence[str]) -> list[Any]:
        found = [await self.repo.get_by_id(pid) for pid in dict.fromkeys(product_ids)]
        return [p for p in found if p is not None]

    @action
    async def get_download_url(self, principal: UserResult | None, product_id: str) -> dict[str, Any]:
        """Count a download of an active product and return where to fetch its file.

        Files in our storage get a fresh (possibly presigned) URL; external
        file URLs are returned unchanged.
        """
        require_user(principal, "You must be logged in to download this product")
        product = await self.repo.get_by_id(product_id)
        if product is None or not product.is_active or not product.file_url:
            raise ValidationException("This product has no downloadable file", field="id")
        url = product.file_url
        if self.storage is not None:
            ref = self.storage.ref_for_url(product.file_url)
            if ref is not None:
                url = await self.storage.generate_download_url(ref)
        updated = await self.repo.increment_downloads(product_id)
        await self.cache.invalidate(record_tag("product", product_id))
        return {
            "url": url,
            "file_name": product.file_name,
            "download_count": updated.download_count if updated else product.download_count,
        }

    @action
    async def toggle_product_status(self, principal: UserResult | None, product_id: str) -> Any:
        user = require_user(principal, "You must be logged in to update this product")
        product = await self._get_owned(
            user, product_id, "You don't have permission to update this product"
        )
        updated = take_first(
            await self.repo.update_by_key(product_id, {"is_active": not product.is_active})
        )
        await self._invalidate([product_id])
        return updated
