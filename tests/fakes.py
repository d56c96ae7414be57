"""In-memory stand-ins for the action-layer ports (stores, cache, storage, shipping)."""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from itertools import count
from types import SimpleNamespace
from typing import Any

from storefront.application.dtos.user import UserResult

ADMIN = UserResult(id="admin-1", email="admin@example.com", role="admin", name="Admin")
USER = UserResult(id="user-1", email="user@example.com", role="user", name="User")
OTHER_USER = UserResult(id="user-2", email="other@example.com", role="user", name="Other")

FILES_BASE = "http://files.test/files/"

ADMIN_PASSWORD = "AdminPassword123"
USER_PASSWORD = "UserPassword123"


def record(**fields: Any) -> SimpleNamespace:
    return SimpleNamespace(**fields)


class FakeStore:
    """Keyed store over a dict; transaction() restores the dict on error."""

    def __init__(self, records: Sequence[Any] = ()) -> None:
        self.rows: dict[str, Any] = {r.id: r for r in records}
        self.events: list[tuple[Any, ...]] = []
        self.delete_error: Exception | None = None
        self._ids = count(1)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    async def get_by_id(self, entity_id: str) -> Any | None:
        return self.rows.get(entity_id)

    async def delete_by_key(self, key: str) -> list[Any]:
        self.events.append(("delete", key))
        if self.delete_error is not None:
            raise self.delete_error
        row = self.rows.pop(key, None)
        return [row] if row is not None else []

    async def delete_by_key_set(self, keys: Sequence[str]) -> list[Any]:
        self.events.append(("delete_set", list(keys)))
        if self.delete_error is not None:
            raise self.delete_error
        deleted = []
        for key in dict.fromkeys(keys):
            row = self.rows.pop(key, None)
            if row is not None:
                deleted.append(row)
        return deleted

    async def update_by_key(self, key: str, values: dict[str, Any]) -> list[Any]:
        return await self.update_by_key_set([key], values)

    async def update_by_key_set(self, keys: Sequence[str], values: dict[str, Any]) -> list[Any]:
        updated = []
        for key in dict.fromkeys(keys):
            row = self.rows.get(key)
            if row is None:
                continue
            for name, value in values.items():
                setattr(row, name, value)
            updated.append(row)
        return updated

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["FakeStore"]:
        snapshot = dict(self.rows)
        self.events.append(("begin",))
        try:
            yield self
        except BaseException:
            self.rows = snapshot
            self.events.append(("rollback",))
            raise
        self.events.append(("commit",))


class FakeProductRepo(FakeStore):
    def __init__(self, records: Sequence[Any] = (), ordered: Sequence[str] = ()) -> None:
        super().__init__(records)
        self.ordered = set(ordered)

    async def create_product(self, values: dict[str, Any]) -> Any:
        product = record(id=self.next_id("product"), **{"download_count": 0, **values})
        self.rows[product.id] = product
        return product

    async def count_order_items(self, product_ids: Sequence[str]) -> int:
        return sum(1 for pid in product_ids if pid in self.ordered)

    async def increment_downloads(self, product_id: str) -> Any | None:
        product = self.rows.get(product_id)
        if product is not None:
            product.download_count += 1
        return product


class FakeCategoryRepo(FakeStore):
    def __init__(self, records: Sequence[Any] = (), products_per_category: int = 0) -> None:
        super().__init__(records)
        self.products_per_category = products_per_category
        self.detached: list[str] = []

    async def create_category(self, values: dict[str, Any]) -> Any:
        category = record(id=self.next_id("category"), **values)
        self.rows[category.id] = category
        return category

    async def get_by_slug(self, slug: str) -> Any | None:
        return next((c for c in self.rows.values() if c.slug == slug), None)

    async def detach_products(self, category_ids: Sequence[str]) -> int:
        self.detached.extend(category_ids)
        return self.products_per_category * len(category_ids)


class FakeUserRepo(FakeStore):
    def __init__(self, records: Sequence[Any] = ()) -> None:
        super().__init__(records)
        self.passwords: dict[str, str] = {}

    async def get_by_email(self, email: str) -> Any | None:
        return next((u for u in self.rows.values() if u.email == email.strip().lower()), None)

    async def create_user(
        self,
        email: str,
        password: str,
        *,
        name: str | None = None,
        role: str = "user",
        avatar: str | None = None,
    ) -> Any:
        user = record(id=self.next_id("user"), email=email, name=name, role=role, avatar=avatar)
        self.rows[user.id] = user
        self.passwords[user.id] = password
        return user

    async def set_password(self, user_id: str, password: str) -> None:
        self.passwords[user_id] = password


class FakeOrderRepo(FakeStore):
    def __init__(self, records: Sequence[Any] = ()) -> None:
        super().__init__(records)
        self.items: dict[str, list[dict[str, Any]]] = {}

    async def create_order(self, values: dict[str, Any], items: Sequence[dict[str, Any]]) -> Any:
        order = record(id=self.next_id("order"), **values)
        self.rows[order.id] = order
        self.items[order.id] = list(items)
        return order

    async def get_by_order_number(self, order_number: str) -> Any | None:
        return next((o for o in self.rows.values() if o.order_number == order_number), None)

    async def delete_items_for_orders(self, order_ids: Sequence[str]) -> int:
        return sum(len(self.items.pop(oid, [])) for oid in order_ids)


class FakeSettingRepo(FakeStore):
    async def create_setting(self, values: dict[str, Any]) -> Any:
        setting = record(id=self.next_id("setting"), **values)
        self.rows[setting.id] = setting
        return setting

    async def get_by_key(self, key: str) -> Any | None:
        return next((s for s in self.rows.values() if s.key == key), None)

    async def upsert_by_key(self, key: str, values: dict[str, Any]) -> Any:
        existing = await self.get_by_key(key)
        if existing is None:
            return await self.create_setting({"key": key, "category": "general", **values})
        return (await self.update_by_key(existing.id, values))[0]

    async def update_values_in_category(
        self, category: str, values: dict[str, Any], updated_by: str | None
    ) -> list[Any]:
        updated = []
        for key, value in values.items():
            setting = await self.get_by_key(key)
            if setting is not None and setting.category == category:
                setting.value = value
                setting.updated_by = updated_by
                updated.append(setting)
        return updated


class RecordingCache:
    """Invalidation port that remembers every tag it was asked to drop."""

    def __init__(self) -> None:
        self.invalidated: list[str] = []

    async def invalidate(self, tag: str) -> int:
        self.invalidated.append(tag)
        return 0


class FakeStorage:
    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.metadata: dict[str, dict[str, str] | None] = {}

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        self.objects[storage_ref] = file_data
        self.metadata[storage_ref] = metadata
        return {"key": storage_ref, "size": len(file_data), "url": self.public_url(storage_ref)}

    async def delete(self, storage_ref: str) -> bool:
        self.deleted.append(storage_ref)
        return self.objects.pop(storage_ref, None) is not None

    async def generate_download_url(self, storage_ref: str) -> str:
        return f"{self.public_url(storage_ref)}?signature=test"

    def public_url(self, storage_ref: str) -> str:
        return f"{FILES_BASE}{storage_ref}"

    def ref_for_url(self, url: str) -> str | None:
        return url[len(FILES_BASE):] if url.startswith(FILES_BASE) else None


class FakeShippingProvider:
    def __init__(self, missing: Sequence[str] = ()) -> None:
        self.missing = list(missing)
        self.calls: list[tuple[Any, ...]] = []

    def is_configured(self) -> bool:
        return not self.missing

    def missing_config(self) -> list[str]:
        return list(self.missing)

    async def get_costs(
        self, origin: str, destination: str, weight: int, couriers: Sequence[str]
    ) -> dict[str, Any]:
        self.calls.append((origin, destination, weight, list(couriers)))
        return {
            "origin": origin,
            "destination": destination,
            "weight": weight,
            "couriers": list(couriers),
            "results": [{"courier": c} for c in couriers],
        }
