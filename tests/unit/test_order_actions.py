"""Tests for OrderActions with in-memory ports."""

import re
from decimal import Decimal

import pytest

from storefront.application.actions import OrderActions
from tests.fakes import ADMIN, USER, FakeOrderRepo, RecordingCache, record

ORDER = {
    "user_id": "u1",
    "total_amount": "25.00",
    "items": [
        {"product_id": "p1", "quantity": 2, "unit_price": "10.00", "total_price": "20.00"},
        {"product_id": "p2", "unit_price": "5.00", "total_price": "5.00"},
    ],
}


@pytest.fixture
def repo() -> FakeOrderRepo:
    orders = FakeOrderRepo(
        [record(id="o1", order_number="ORD-1", status="pending", payment_status="pending")]
    )
    orders.items["o1"] = [{"product_id": "p1"}]
    return orders


@pytest.fixture
def cache() -> RecordingCache:
    return RecordingCache()


@pytest.fixture
def actions(repo, cache) -> OrderActions:
    return OrderActions(repo, cache)


async def test_orders_are_admin_only(actions: OrderActions) -> None:
    assert (await actions.create_order(USER, ORDER)).error == (
        "You don't have permission to manage orders"
    )


async def test_create_generates_number_and_writes_items_in_transaction(
    actions: OrderActions, repo: FakeOrderRepo, cache: RecordingCache
) -> None:
    result = await actions.create_order(ADMIN, ORDER)

    order = result.data
    assert re.fullmatch(r"ORD-\d{8}-[A-Z0-9]{6}", order.order_number)
    assert order.total_amount == Decimal("25.00")
    assert order.status == "pending"
    assert [i["quantity"] for i in repo.items[order.id]] == [2, 1]
    assert repo.items[order.id][0]["unit_price"] == Decimal("10.00")
    assert ("commit",) in repo.events
    assert cache.invalidated == ["orders"]


async def test_create_rejects_duplicate_order_number(actions: OrderActions) -> None:
    result = await actions.create_order(ADMIN, {**ORDER, "order_number": "ORD-1"})
    assert result.error == "An order with this number already exists"


async def test_create_reports_item_validation(actions: OrderActions) -> None:
    result = await actions.create_order(ADMIN, {**ORDER, "items": []})
    assert result.error == "At least one item is required"


async def test_update_status(actions: OrderActions, cache: RecordingCache) -> None:
    result = await actions.update_order(ADMIN, "o1", {"status": "completed", "payment_status": "paid"})
    assert (result.data.status, result.data.payment_status) == ("completed", "paid")
    assert cache.invalidated == ["orders", "order-o1"]


async def test_update_rejects_unknown_status(actions: OrderActions) -> None:
    assert not (await actions.update_order(ADMIN, "o1", {"status": "shipped"})).ok


async def test_update_unknown_order(actions: OrderActions) -> None:
    assert (await actions.update_order(ADMIN, "nope", {"notes": "x"})).error == "Order not found"


async def test_delete_removes_items_with_order(actions: OrderActions, repo: FakeOrderRepo) -> None:
    result = await actions.delete_order(ADMIN, "o1")
    assert result.data.id == "o1"
    assert repo.items == {}
    assert repo.rows == {}


async def test_bulk_status_update(actions: OrderActions, repo: FakeOrderRepo) -> None:
    result = await actions.update_orders(ADMIN, {"ids": ["o1"], "status": "cancelled"})
    assert result.data[0].status == "cancelled"
