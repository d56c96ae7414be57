"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Records are returned as opaque objects exposing at least an ``id`` attribute;
the HTTP layer serializes them with from_attributes schemas.
"""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol


class IKeyedResourceStore[RecordT](Protocol):
    """Storage capability behind the generic delete/update actions.

    delete_by_key / delete_by_key_set remove rows by id and return what was
    removed (possibly nothing). transaction() scopes a pre-delete step and
    the delete into one atomic unit.
    """

    async def get_by_id(self, entity_id: str) -> RecordT | None:
        """Return the record with this id, or None."""

    async def delete_by_key(self, key: str) -> list[RecordT]:
        """Delete the row whose id equals key; return the deleted rows."""

    async def delete_by_key_set(self, keys: Sequence[str]) -> list[RecordT]:
        """Delete every row whose id is in keys; return the deleted rows."""

    async def update_by_key(self, key: str, values: dict[str, Any]) -> list[RecordT]:
        """Update the row whose id equals key; return the updated rows."""

    async def update_by_key_set(
        self, keys: Sequence[str], values: dict[str, Any]
    ) -> list[RecordT]:
        """Apply values to every row whose id is in keys; return the updated rows."""

    def transaction(self) -> AbstractAsyncContextManager[Any]:
        """Return an async context manager that commits or rolls back as a unit."""


class IProductRepository(IKeyedResourceStore[Any], Protocol):
    async def create_product(self, values: dict[str, Any]) -> Any:
        """Insert a product and return it."""

    async def count_order_items(self, product_ids: Sequence[str]) -> int:
        """Return how many order lines reference any of product_ids."""

    async def increment_downloads(self, product_id: str) -> Any | None:
        """Add one to download_count and return the product (None if missing)."""


class ICategoryRepository(IKeyedResourceStore[Any], Protocol):
    async def create_category(self, values: dict[str, Any]) -> Any:
        """Insert a category and return it."""

    async def get_by_slug(self, slug: str) -> Any | None:
        """Return the category with this slug, or None."""

    async def detach_products(self, category_ids: Sequence[str]) -> int:
        """Clear category_id on products of these categories; return rows touched."""


class IOrderRepository(IKeyedResourceStore[Any], Protocol):
    async def create_order(
        self, values: dict[str, Any], items: Sequence[dict[str, Any]]
    ) -> Any:
        """Insert an order and its items and return the order."""

    async def get_by_order_number(self, order_number: str) -> Any | None:
        """Return the order with this number, or None."""

    async def delete_items_for_orders(self, order_ids: Sequence[str]) -> int:
        """Delete the items of these orders; return rows deleted."""


class IUserRepository(IKeyedResourceStore[Any], Protocol):
    async def get_by_email(self, email: str) -> Any | None:
        """Return the user with this email, or None."""

    async def create_user(
        self,
        email: str,
        password: str,
        *,
        name: str | None = None,
        role: str = "user",
        avatar: str | None = None,
    ) -> Any:
        """Insert a user with a hashed password and return it."""

    async def set_password(self, user_id: str, password: str) -> None:
        """Replace the stored password hash for user_id."""


class ISettingRepository(IKeyedResourceStore[Any], Protocol):
    async def create_setting(self, values: dict[str, Any]) -> Any:
        """Insert a setting and return it."""

    async def get_by_key(self, key: str) -> Any | None:
        """Return the setting with this key, or None."""

    async def upsert_by_key(self, key: str, values: dict[str, Any]) -> Any:
        """Update the setting with this key, inserting it when missing."""

    async def update_values_in_category(
        self, category: str, values: dict[str, Any], updated_by: str | None
    ) -> list[Any]:
        """Set value for each key of values that exists in category."""
