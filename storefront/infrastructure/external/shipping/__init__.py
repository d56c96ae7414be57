"""Shipping-rate provider clients."""

from storefront.infrastructure.external.shipping.rajaongkir import RajaOngkirClient

__all__ = ["RajaOngkirClient"]
