"""Shipping-rate lookup action."""

from typing import Any

from storefront.application.actions.resource import ActionResult, action, parse_input
from storefront.application.interfaces.services import IShippingRateProvider
from storefront.domain.exceptions import ShippingProviderNotConfiguredException
from storefront.schemas.shipping import ShippingRatesRequest


class ShippingActions:
    def __init__(self, provider: IShippingRateProvider) -> None:
        self.provider = provider

    def status(self) -> dict[str, Any]:
        """Return {configured, missing} for the provider."""
        missing = self.provider.missing_config()
        return {"configured": not missing, "missing": missing}

    @action
    async def get_shipping_rates(
        self, payload: ShippingRatesRequest | dict[str, Any]
    ) -> ActionResult[dict[str, Any]]:
        """Check provider configuration, validate input, then query every courier.

        An unconfigured provider fails before the payload is looked at.
        """
        if not self.provider.is_configured():
            raise ShippingProviderNotConfiguredException(self.provider.missing_config())
        data = parse_input(ShippingRatesRequest, payload)
        rates = await self.provider.get_costs(
            data.origin, data.destination, data.weight, data.couriers
        )
        return ActionResult.success(rates)
