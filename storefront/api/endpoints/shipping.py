"""Shipping-rate API (RajaOngkir)."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from storefront.api.dependencies import get_shipping_actions
from storefront.api.responses import action_response
from storefront.application.actions import ShippingActions
from storefront.core.limiter import limit_shipping
from storefront.schemas.shipping import ShippingRatesRequest

router = APIRouter()

Actions = Annotated[ShippingActions, Depends(get_shipping_actions)]


@router.get("/rates")
async def shipping_status(actions: Actions) -> dict[str, Any]:
    """Report whether the provider is configured and which env vars are missing."""
    return actions.status()


@router.post("/rates")
@limit_shipping
async def shipping_rates(request: Request, body: ShippingRatesRequest, actions: Actions):
    """Costs for every requested courier, fetched concurrently."""
    return action_response(await actions.get_shipping_rates(body))
