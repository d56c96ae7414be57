"""Tests for ProductActions with in-memory ports."""

from decimal import Decimal

import pytest

from storefront.application.actions import ProductActions
from tests.fakes import (
    ADMIN,
    FILES_BASE,
    OTHER_USER,
    USER,
    FakeProductRepo,
    FakeStorage,
    RecordingCache,
    record,
)

VALID = {"title": "Poster", "description": "A3 print", "price": "12.50", "category": "Art"}


def _product(product_id: str, owner: str = USER.id, **fields) -> object:
    values = {
        "id": product_id,
        "title": "Poster",
        "created_by": owner,
        "is_active": True,
        "image_url": None,
        "file_url": None,
        "file_name": None,
        "download_count": 0,
    }
    values.update(fields)
    return record(**values)


@pytest.fixture
def repo() -> FakeProductRepo:
    return FakeProductRepo(
        [
            _product("p1"),
            _product(
                "p2",
                owner=OTHER_USER.id,
                image_url=f"{FILES_BASE}uploads/u/1_cover.png",
                file_url=f"{FILES_BASE}uploads/u/1_design.pdf",
                file_name="design.pdf",
            ),
            _product("p3", file_url="https://cdn.example.com/external.zip", file_name="external.zip"),
        ],
        ordered=["p3"],
    )


@pytest.fixture
def cache() -> RecordingCache:
    return RecordingCache()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def actions(repo, cache, storage) -> ProductActions:
    return ProductActions(repo, cache, storage)


async def test_create_requires_login(actions: ProductActions) -> None:
    result = await actions.create_product(None, VALID)
    assert result.error == "You must be logged in to create a product"


async def test_create_validates_input(actions: ProductActions) -> None:
    result = await actions.create_product(USER, {**VALID, "price": "12.999"})
    assert result.error == "Please enter a valid price"


async def test_create_records_creator_and_invalidates(
    actions: ProductActions, cache: RecordingCache
) -> None:
    result = await actions.create_product(USER, VALID)

    assert result.ok
    assert result.data.created_by == USER.id
    assert result.data.price == Decimal("12.50")
    assert cache.invalidated == ["products", "category-counts"]


async def test_update_by_owner(actions: ProductActions, cache: RecordingCache) -> None:
    result = await actions.update_product(USER, "p1", {"title": "Renamed", "price": "3"})

    assert result.ok
    assert result.data.title == "Renamed"
    assert result.data.price == Decimal("3")
    assert "product-p1" in cache.invalidated


async def test_update_by_other_user_is_denied(actions: ProductActions, repo) -> None:
    result = await actions.update_product(USER, "p2", {"title": "Mine now"})
    assert result.error == "You don't have permission to update this product"
    assert repo.rows["p2"].title == "Poster"


async def test_admin_may_update_any_product(actions: ProductActions) -> None:
    assert (await actions.update_product(ADMIN, "p2", {"is_active": False})).data.is_active is False


async def test_update_unknown_product(actions: ProductActions) -> None:
    assert (await actions.update_product(ADMIN, "nope", {"title": "x"})).error == "Product not found"


async def test_delete_removes_row_and_stored_files(
    actions: ProductActions, repo, storage: FakeStorage, cache: RecordingCache
) -> None:
    result = await actions.delete_product(ADMIN, "p2")

    assert result.ok
    assert result.data.id == "p2"
    assert "p2" not in repo.rows
    assert storage.deleted == ["uploads/u/1_cover.png", "uploads/u/1_design.pdf"]
    assert {"products", "product-p2", "category-counts"} <= set(cache.invalidated)


async def test_delete_of_ordered_product_is_refused(
    actions: ProductActions, repo, storage: FakeStorage
) -> None:
    result = await actions.delete_product(USER, "p3")

    assert result.error == (
        "Products that appear on orders cannot be deleted; deactivate them instead"
    )
    assert "p3" in repo.rows
    assert storage.deleted == []


async def test_delete_by_non_owner_is_denied(actions: ProductActions, repo) -> None:
    result = await actions.delete_product(USER, "p2")
    assert result.error == "You don't have permission to delete this product"
    assert "p2" in repo.rows


async def test_bulk_delete_is_admin_only(actions: ProductActions) -> None:
    result = await actions.delete_products(USER, {"ids": ["p1"]})
    assert result.error == "You don't have permission to delete products"


async def test_bulk_delete_refuses_when_any_product_is_ordered(actions: ProductActions, repo) -> None:
    result = await actions.delete_products(ADMIN, {"ids": ["p1", "p3"]})
    assert not result.ok
    assert {"p1", "p3"} <= set(repo.rows)


async def test_bulk_delete(actions: ProductActions, repo, cache: RecordingCache) -> None:
    result = await actions.delete_products(ADMIN, {"ids": ["p1", "p2", "missing"]})

    assert sorted(p.id for p in result.data) == ["p1", "p2"]
    assert set(repo.rows) == {"p3"}
    assert {"product-p1", "product-p2"} <= set(cache.invalidated)


async def test_bulk_update_sets_status(actions: ProductActions, repo) -> None:
    result = await actions.update_products(ADMIN, {"ids": ["p1", "p2"], "is_active": False})
    assert [p.id for p in result.data] == ["p1", "p2"]
    assert repo.rows["p1"].is_active is False
    assert repo.rows["p2"].is_active is False


async def test_toggle_flips_status(actions: ProductActions, repo) -> None:
    assert (await actions.toggle_product_status(USER, "p1")).data.is_active is False
    assert (await actions.toggle_product_status(USER, "p1")).data.is_active is True


async def test_download_requires_login(actions: ProductActions) -> None:
    result = await actions.get_download_url(None, "p2")
    assert result.error == "You must be logged in to download this product"


async def test_download_of_stored_file_uses_signed_url_and_counts(
    actions: ProductActions, repo, cache: RecordingCache
) -> None:
    result = await actions.get_download_url(USER, "p2")

    assert result.data == {
        "url": f"{FILES_BASE}uploads/u/1_design.pdf?signature=test",
        "file_name": "design.pdf",
        "download_count": 1,
    }
    assert repo.rows["p2"].download_count == 1
    assert cache.invalidated == ["product-p2"]


async def test_download_of_external_file_returns_url_unchanged(actions: ProductActions) -> None:
    result = await actions.get_download_url(USER, "p3")
    assert result.data["url"] == "https://cdn.example.com/external.zip"


@pytest.mark.parametrize("product_id", ["p1", "missing"])
async def test_download_without_file(actions: ProductActions, product_id: str) -> None:
    result = await actions.get_download_url(USER, product_id)
    assert result.error == "This product has no downloadable file"


async def test_download_of_inactive_product(actions: ProductActions, repo) -> None:
    repo.rows["p2"].is_active = False
    result = await actions.get_download_url(USER, "p2")
    assert result.error == "This product has no downloadable file"
