"""Shipping-rate API schemas."""

from typing import Any

from pydantic import BaseModel, Field, StrictInt


class ShippingRatesRequest(BaseModel):
    """Input of a rate lookup: city ids, weight in grams and courier codes."""

    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    weight: StrictInt = Field(..., gt=0)
    couriers: list[str] = Field(..., min_length=1)


class ShippingRatesResponse(BaseModel):
    origin: str
    destination: str
    weight: int
    couriers: list[str]
    results: list[dict[str, Any]]
