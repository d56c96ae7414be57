"""Product API flow against the SQLite test database."""

from decimal import Decimal

from httpx import AsyncClient

PRODUCT = {
    "title": "Mountain Poster",
    "description": "A3 print",
    "price": "12.50",
    "category": "Art",
    "tags": ["poster"],
    "file_url": "https://cdn.example.com/mountain.pdf",
    "file_name": "mountain.pdf",
}


async def _create(client: AsyncClient, headers: dict[str, str], **fields) -> dict:
    response = await client.post("/api/products", json={**PRODUCT, **fields}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def test_create_and_read_product(
    client: AsyncClient, admin: dict[str, str], admin_headers: dict[str, str]
) -> None:
    created = await _create(client, admin_headers)
    assert created["created_by"] == admin["id"]
    assert Decimal(created["price"]) == Decimal("12.50")

    response = await client.get(f"/api/products/{created['id']}")
    assert response.status_code == 200
    assert response.json()["title"] == "Mountain Poster"


async def test_invalid_price_is_rejected(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/products", json={**PRODUCT, "price": "12.505"}, headers=admin_headers
    )
    assert response.status_code == 422


async def test_list_search_and_visibility(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    await _create(client, admin_headers, title="Mountain Poster")
    await _create(client, admin_headers, title="Ocean Poster")
    await _create(client, admin_headers, title="Hidden Mountain", is_active=False)

    public = await client.get("/api/products", params={"title": "mountain"})
    assert public.json()["total"] == 1

    as_admin = await client.get(
        "/api/products", params={"title": "mountain"}, headers=admin_headers
    )
    assert as_admin.json()["total"] == 2

    paged = await client.get("/api/products", params={"per_page": 1, "sort": "title.asc"})
    body = paged.json()
    assert body["page_count"] == 2
    assert [p["title"] for p in body["data"]] == ["Mountain Poster"]


async def test_inactive_product_is_hidden_from_public(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    created = await _create(client, admin_headers, is_active=False)
    assert (await client.get(f"/api/products/{created['id']}")).status_code == 404
    assert (
        await client.get(f"/api/products/{created['id']}", headers=admin_headers)
    ).status_code == 200


async def test_update_toggle_and_bulk_update(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    created = await _create(client, admin_headers)
    product_id = created["id"]

    updated = await client.put(
        f"/api/products/{product_id}", json={"price": "9.99"}, headers=admin_headers
    )
    assert Decimal(updated.json()["data"]["price"]) == Decimal("9.99")

    toggled = await client.post(f"/api/products/{product_id}/toggle", headers=admin_headers)
    assert toggled.json()["data"]["is_active"] is False

    bulk = await client.post(
        "/api/products/bulk-update",
        json={"ids": [product_id], "is_active": True},
        headers=admin_headers,
    )
    assert bulk.json()["data"][0]["is_active"] is True


async def test_download_counts_and_requires_sign_in(
    client: AsyncClient, admin_headers: dict[str, str], customer_headers: dict[str, str]
) -> None:
    created = await _create(client, admin_headers)

    anonymous = await client.get(f"/api/products/{created['id']}/download")
    assert anonymous.status_code == 400
    assert anonymous.json()["error"] == "You must be logged in to download this product"

    response = await client.get(
        f"/api/products/{created['id']}/download", headers=customer_headers
    )
    data = response.json()["data"]
    assert data["url"] == PRODUCT["file_url"]
    assert data["download_count"] == 1


async def test_delete_unknown_product_reports_not_found(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.delete("/api/products/missing", headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"data": None, "error": "Product not found"}


async def test_ordered_product_cannot_be_deleted(
    client: AsyncClient,
    admin_headers: dict[str, str],
    customer: dict[str, str],
) -> None:
    ordered = await _create(client, admin_headers)
    spare = await _create(client, admin_headers, title="Spare")
    order = await client.post(
        "/api/orders",
        json={
            "user_id": customer["id"],
            "total_amount": "12.50",
            "items": [
                {"product_id": ordered["id"], "unit_price": "12.50", "total_price": "12.50"}
            ],
        },
        headers=admin_headers,
    )
    assert order.status_code == 200, order.text

    refused = await client.post(
        "/api/products/bulk-delete",
        json={"ids": [ordered["id"], spare["id"]]},
        headers=admin_headers,
    )
    assert refused.status_code == 400
    assert "cannot be deleted" in refused.json()["error"]
    # Nothing was deleted, not even the product without orders.
    assert (await client.get(f"/api/products/{spare['id']}")).status_code == 200

    deleted = await client.delete(f"/api/products/{spare['id']}", headers=admin_headers)
    assert deleted.json()["data"]["id"] == spare["id"]
