"""Tests for the resource action layer: ActionResult, @action, delete_single, delete_multiple."""

import pytest

from storefront.application.actions import (
    UNKNOWN_ERROR_MESSAGE,
    ActionResult,
    action,
    delete_multiple,
    delete_single,
)
from storefront.domain.exceptions import ValidationException
from storefront.shared.context import is_cache_bypassed
from tests.fakes import FakeStore, RecordingCache, record


@pytest.fixture
def store() -> FakeStore:
    return FakeStore([record(id="a"), record(id="b"), record(id="c")])


@pytest.fixture
def cache() -> RecordingCache:
    return RecordingCache()


def test_action_result_success_and_failure() -> None:
    ok = ActionResult.success({"id": "a"})
    assert ok.ok and ok.data == {"id": "a"} and ok.error is None
    empty = ActionResult.success()
    assert empty.ok and empty.data is None
    failed = ActionResult.failure("nope")
    assert not failed.ok and failed.data is None and failed.error == "nope"


async def test_action_wraps_plain_values_and_passes_results_through() -> None:
    @action
    async def plain() -> int:
        return 3

    @action
    async def explicit() -> ActionResult[int]:
        return ActionResult.failure("explicit failure")

    assert await plain() == ActionResult.success(3)
    assert await explicit() == ActionResult.failure("explicit failure")


async def test_action_never_raises() -> None:
    @action
    async def broken() -> None:
        raise RuntimeError("database is on fire")

    @action
    async def silent() -> None:
        raise RuntimeError()

    assert (await broken()).error == "database is on fire"
    assert (await silent()).error == UNKNOWN_ERROR_MESSAGE


async def test_action_bypasses_read_cache_while_running() -> None:
    seen: list[bool] = []

    @action
    async def mutate() -> None:
        seen.append(is_cache_bypassed())

    await mutate()
    assert seen == [True]
    assert is_cache_bypassed() is False


async def test_delete_single_returns_deleted_record_and_invalidates_tag(
    store: FakeStore, cache: RecordingCache
) -> None:
    result = await delete_single(store, "a", revalidate_tag="products", cache=cache)

    assert result.ok
    assert result.data.id == "a"
    assert "a" not in store.rows
    assert cache.invalidated == ["products"]


async def test_delete_single_unknown_id_is_success_with_no_data(
    store: FakeStore, cache: RecordingCache
) -> None:
    result = await delete_single(store, "missing", revalidate_tag="products", cache=cache)

    assert result == ActionResult.success(None)
    assert set(store.rows) == {"a", "b", "c"}
    assert cache.invalidated == ["products"]


async def test_delete_single_twice_is_idempotent(
    store: FakeStore, cache: RecordingCache
) -> None:
    first = await delete_single(store, "a", revalidate_tag="products", cache=cache)
    second = await delete_single(store, "a", revalidate_tag="products", cache=cache)

    assert first.ok and first.data.id == "a"
    assert second == ActionResult.success(None)
    assert set(store.rows) == {"b", "c"}
    assert cache.invalidated == ["products", "products"]


async def test_delete_single_runs_pre_delete_first_in_same_transaction(
    store: FakeStore, cache: RecordingCache
) -> None:
    async def pre_delete(resource_id: str) -> None:
        store.events.append(("pre_delete", resource_id))

    await delete_single(
        store, "b", revalidate_tag="orders", cache=cache, pre_delete=pre_delete
    )

    assert store.events == [("begin",), ("pre_delete", "b"), ("delete", "b"), ("commit",)]


async def test_delete_single_pre_delete_failure_deletes_nothing(
    store: FakeStore, cache: RecordingCache
) -> None:
    async def refuse(resource_id: str) -> None:
        raise ValidationException("Still referenced by an order")

    result = await delete_single(
        store, "a", revalidate_tag="products", cache=cache, pre_delete=refuse
    )

    assert result == ActionResult.failure("Still referenced by an order")
    assert "a" in store.rows
    assert ("delete", "a") not in store.events
    assert cache.invalidated == []


async def test_delete_single_store_failure_rolls_back(
    store: FakeStore, cache: RecordingCache
) -> None:
    store.delete_error = RuntimeError("connection reset")

    result = await delete_single(store, "a", revalidate_tag="products", cache=cache)

    assert result.error == "connection reset"
    assert store.events[-1] == ("rollback",)
    assert set(store.rows) == {"a", "b", "c"}
    assert cache.invalidated == []


async def test_delete_single_requires_an_id(store: FakeStore, cache: RecordingCache) -> None:
    result = await delete_single(store, "", revalidate_tag="products", cache=cache)

    assert result.error == "An id is required"
    assert store.events == []


async def test_delete_multiple_deletes_only_existing_ids(
    store: FakeStore, cache: RecordingCache
) -> None:
    result = await delete_multiple(
        store, ["a", "missing", "c", "a"], revalidate_tag="products", cache=cache
    )

    assert result.ok
    assert sorted(r.id for r in result.data) == ["a", "c"]
    assert set(store.rows) == {"b"}
    assert cache.invalidated == ["products"]


async def test_delete_multiple_passes_full_id_list_to_pre_delete(
    store: FakeStore, cache: RecordingCache
) -> None:
    received: list[list[str]] = []

    async def pre_delete(ids: list[str]) -> None:
        received.append(list(ids))

    await delete_multiple(
        store, ["a", "b"], revalidate_tag="users", cache=cache, pre_delete=pre_delete
    )

    assert received == [["a", "b"]]


async def test_delete_multiple_nothing_matched_is_empty_success(
    store: FakeStore, cache: RecordingCache
) -> None:
    result = await delete_multiple(store, ["x", "y"], revalidate_tag="products", cache=cache)

    assert result == ActionResult.success([])
    assert cache.invalidated == ["products"]


async def test_delete_multiple_pre_delete_failure_keeps_rows(
    store: FakeStore, cache: RecordingCache
) -> None:
    async def refuse(ids: list[str]) -> None:
        raise ValidationException("You cannot delete your own account")

    result = await delete_multiple(
        store, ["a", "b"], revalidate_tag="users", cache=cache, pre_delete=refuse
    )

    assert result.error == "You cannot delete your own account"
    assert set(store.rows) == {"a", "b", "c"}
    assert cache.invalidated == []


async def test_delete_multiple_requires_ids(store: FakeStore, cache: RecordingCache) -> None:
    result = await delete_multiple(store, [], revalidate_tag="products", cache=cache)

    assert result.error == "At least one id is required"
