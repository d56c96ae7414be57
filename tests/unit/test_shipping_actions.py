"""Tests for ShippingActions."""

from storefront.application.actions import ShippingActions
from tests.fakes import FakeShippingProvider

VALID = {"origin": "501", "destination": "114", "weight": 1000, "couriers": ["jne", "pos"]}


async def test_unconfigured_provider_fails_before_validation() -> None:
    provider = FakeShippingProvider(missing=["RAJAONGKIR_API_KEY"])
    result = await ShippingActions(provider).get_shipping_rates({"weight": "heavy"})

    assert result.error == "Shipping provider not configured. Missing: RAJAONGKIR_API_KEY"
    assert provider.calls == []


def test_status_reports_missing_configuration() -> None:
    assert ShippingActions(FakeShippingProvider(missing=["A", "B"])).status() == {
        "configured": False,
        "missing": ["A", "B"],
    }
    assert ShippingActions(FakeShippingProvider()).status() == {
        "configured": True,
        "missing": [],
    }


async def test_rates_from_provider() -> None:
    provider = FakeShippingProvider()
    result = await ShippingActions(provider).get_shipping_rates(VALID)

    assert result.ok
    assert [r["courier"] for r in result.data["results"]] == ["jne", "pos"]
    assert provider.calls == [("501", "114", 1000, ["jne", "pos"])]


async def test_invalid_input_is_reported() -> None:
    provider = FakeShippingProvider()
    result = await ShippingActions(provider).get_shipping_rates({**VALID, "weight": 0})

    assert not result.ok
    assert provider.calls == []
