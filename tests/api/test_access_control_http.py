"""Access-control middleware over HTTP: admin pages and admin-only APIs."""

from httpx import AsyncClient

PRODUCT = {"title": "Poster", "description": "A3 print", "price": "12.50", "category": "Art"}


async def test_product_write_without_token_returns_401(client: AsyncClient) -> None:
    response = await client.post("/api/products", json=PRODUCT)
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


async def test_product_write_by_customer_returns_401(
    client: AsyncClient, customer_headers: dict[str, str]
) -> None:
    response = await client.post("/api/products", json=PRODUCT, headers=customer_headers)
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


async def test_product_write_by_admin_passes(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.post("/api/products", json=PRODUCT, headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["error"] is None
    assert body["data"]["title"] == "Poster"


async def test_product_reads_are_public(client: AsyncClient, database: None) -> None:
    response = await client.get("/api/products")
    assert response.status_code == 200
    assert response.json() == {"data": [], "page_count": 0, "total": 0}


async def test_admin_page_redirects_signed_out_visitor(client: AsyncClient) -> None:
    response = await client.get("/dashboard")
    assert response.status_code == 307
    assert response.headers["location"] == "/login"


async def test_admin_page_redirects_customer(
    client: AsyncClient, customer_headers: dict[str, str]
) -> None:
    response = await client.get("/dashboard/orders", headers=customer_headers)
    assert response.status_code == 307


async def test_session_cookie_is_accepted(client: AsyncClient, admin: dict[str, str]) -> None:
    response = await client.post(
        "/api/products",
        json=PRODUCT,
        headers={"Cookie": f"storefront_session={admin['token']}"},
    )
    assert response.status_code == 200


async def test_upload_by_customer_is_denied(
    client: AsyncClient, customer_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/upload",
        files={"file": ("a.png", b"\x89PNG", "image/png")},
        headers=customer_headers,
    )
    assert response.status_code == 401


async def test_admin_api_dependency_rejects_customer(
    client: AsyncClient, customer_headers: dict[str, str]
) -> None:
    """Routes outside the middleware's prefixes still require the admin role."""
    response = await client.get("/api/users", headers=customer_headers)
    assert response.status_code == 403
    assert (await client.get("/api/orders")).status_code == 401
