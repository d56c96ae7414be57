"""Tests for the RajaOngkir client using httpx.MockTransport."""

from urllib.parse import parse_qs

import httpx
import pytest

from storefront.domain.exceptions import (
    ShippingProviderException,
    ShippingProviderNotConfiguredException,
    ValidationException,
)
from storefront.infrastructure.external.shipping.rajaongkir import (
    RajaOngkirClient,
    normalize_couriers,
)

BASE_URL = "https://api.rajaongkir.test/starter"


def _client(handler, api_key: str | None = "secret-key", base_url: str | None = BASE_URL):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RajaOngkirClient(api_key=api_key, base_url=base_url, http_client=http), http


def test_normalize_couriers() -> None:
    assert normalize_couriers([" JNE", "jne", "Pos ", "", "tiki"]) == ["jne", "pos", "tiki"]


def test_missing_config_names_env_vars() -> None:
    client = RajaOngkirClient(api_key=None, base_url=None)
    assert not client.is_configured()
    assert client.missing_config() == ["RAJAONGKIR_API_KEY", "RAJAONGKIR_BASE_URL"]
    assert RajaOngkirClient(api_key="k", base_url=BASE_URL).is_configured()


async def test_get_costs_posts_one_form_request_per_courier() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
        return httpx.Response(200, json={"rajaongkir": {"courier": form["courier"]}})

    client, http = _client(handler)
    async with http:
        result = await client.get_costs("501", "114", 1700, ["JNE", "pos", "jne"])

    assert result["origin"] == "501"
    assert result["destination"] == "114"
    assert result["weight"] == 1700
    assert result["couriers"] == ["jne", "pos"]
    assert [r["rajaongkir"]["courier"] for r in result["results"]] == ["jne", "pos"]

    assert len(seen) == 2
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == f"{BASE_URL}/cost"
    assert request.headers["key"] == "secret-key"
    form = parse_qs(request.content.decode())
    assert form["origin"] == ["501"]
    assert form["destination"] == ["114"]
    assert form["weight"] == ["1700"]


async def test_error_status_raises_provider_exception() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="Invalid key")

    client, http = _client(handler)
    async with http:
        with pytest.raises(ShippingProviderException) as exc_info:
            await client.get_costs("501", "114", 1000, ["jne"])

    assert exc_info.value.details["status_code"] == 400
    assert "Invalid key" in exc_info.value.message


async def test_unconfigured_client_raises_before_any_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover
        raise AssertionError("no request expected")

    client, http = _client(handler, api_key=None)
    async with http:
        with pytest.raises(ShippingProviderNotConfiguredException):
            await client.get_costs("501", "114", 1000, ["jne"])


async def test_blank_couriers_are_rejected() -> None:
    client, http = _client(lambda request: httpx.Response(200, json={}))
    async with http:
        with pytest.raises(ValidationException):
            await client.get_costs("501", "114", 1000, [" ", ""])
