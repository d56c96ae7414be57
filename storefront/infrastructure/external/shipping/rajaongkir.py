"""RajaOngkir shipping-cost client.

One form-encoded POST to <base_url>/cost per courier, authenticated with
the ``key`` header. Courier requests run concurrently and the raw
provider payloads are returned in courier order.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from storefront.core.config import Settings, get_settings
from storefront.domain.exceptions import (
    ShippingProviderException,
    ShippingProviderNotConfiguredException,
    ValidationException,
)

logger = logging.getLogger(__name__)

_ERROR_BODY_LIMIT = 500


def normalize_couriers(couriers: Sequence[str]) -> list[str]:
    """Lower-case, trim and de-duplicate courier codes, keeping first-seen order."""
    seen: dict[str, None] = {}
    for courier in couriers:
        code = courier.strip().lower()
        if code:
            seen.setdefault(code, None)
    return list(seen)


class RajaOngkirClient:
    """Async RajaOngkir client.

    Args:
        api_key: Account key sent in the ``key`` header.
        base_url: Tier base URL, e.g. https://api.rajaongkir.com/starter.
        http_client: Shared httpx client (app.state.http_client); one is
            created per call when omitted.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str | None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/") if base_url else None
        self.http_client = http_client
        self.timeout = timeout

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, http_client: httpx.AsyncClient | None = None
    ) -> "RajaOngkirClient":
        s = settings or get_settings()
        return cls(
            api_key=s.rajaongkir_api_key.get_secret_value() if s.rajaongkir_api_key else None,
            base_url=s.rajaongkir_base_url,
            http_client=http_client,
            timeout=s.shipping_timeout_seconds,
        )

    def is_configured(self) -> bool:
        return not self.missing_config()

    def missing_config(self) -> list[str]:
        """Return the env var names that still need to be set."""
        missing: list[str] = []
        if not self.api_key:
            missing.append("RAJAONGKIR_API_KEY")
        if not self.base_url:
            missing.append("RAJAONGKIR_BASE_URL")
        return missing

    async def _request_cost_once(
        self,
        client: httpx.AsyncClient,
        origin: str,
        destination: str,
        weight: int,
        courier: str,
    ) -> dict[str, Any]:
        response = await client.post(
            f"{self.base_url}/cost",
            headers={"key": self.api_key or ""},
            data={
                "origin": origin,
                "destination": destination,
                "weight": str(weight),
                "courier": courier,
            },
            timeout=self.timeout,
        )
        if response.is_error:
            logger.warning(
                "RajaOngkir cost request failed for %s: HTTP %s", courier, response.status_code
            )
            raise ShippingProviderException(
                response.status_code, response.text[:_ERROR_BODY_LIMIT], courier
            )
        return response.json()

    async def get_costs(
        self,
        origin: str,
        destination: str,
        weight: int,
        couriers: Sequence[str],
    ) -> dict[str, Any]:
        """Fetch costs for every courier.

        Args:
            origin: Origin city/subdistrict id.
            destination: Destination city/subdistrict id.
            weight: Parcel weight in grams.
            couriers: Courier codes (e.g. ["jne", "pos"]).

        Returns:
            {origin, destination, weight, couriers, results} where results[i]
            is the provider payload for couriers[i].

        Raises:
            ShippingProviderNotConfiguredException: Key or base URL missing.
            ValidationException: No courier left after normalization.
            ShippingProviderException: Provider returned a non-2xx status.
        """
        missing = self.missing_config()
        if missing:
            raise ShippingProviderNotConfiguredException(missing)
        codes = normalize_couriers(couriers)
        if not codes:
            raise ValidationException("At least one courier must be provided", field="couriers")

        async def run(client: httpx.AsyncClient) -> list[dict[str, Any]]:
            return list(
                await asyncio.gather(
                    *(
                        self._request_cost_once(client, origin, destination, weight, code)
                        for code in codes
                    )
                )
            )

        if self.http_client is not None:
            results = await run(self.http_client)
        else:
            async with httpx.AsyncClient() as client:
                results = await run(client)
        return {
            "origin": origin,
            "destination": destination,
            "weight": weight,
            "couriers": codes,
            "results": results,
        }
