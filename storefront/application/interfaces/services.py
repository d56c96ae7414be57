"""Service interfaces (ports) for the application layer.

Protocols for the cache-invalidation port, object storage and the
shipping-rate provider.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol


class ICacheInvalidator(Protocol):
    """Invalidation port: drop every cached entry registered under a tag."""

    async def invalidate(self, tag: str) -> int:
        """Invalidate tag; return the number of entries dropped."""


class IFileStorage(Protocol):
    """Object storage used for product images and downloadable files."""

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Store bytes under storage_ref; return key, size, checksum and URL."""

    async def delete(self, storage_ref: str) -> bool:
        """Delete the object; return True if it existed."""

    async def generate_download_url(self, storage_ref: str) -> str:
        """Return a (possibly expiring) URL the client can download from."""

    def public_url(self, storage_ref: str) -> str:
        """Return the public URL for storage_ref."""

    def ref_for_url(self, url: str) -> str | None:
        """Return the storage_ref behind a public URL, or None if not ours."""


class IShippingRateProvider(Protocol):
    """Shipping-cost lookup (RajaOngkir-compatible)."""

    def is_configured(self) -> bool:
        """Return True when all provider settings are present."""

    def missing_config(self) -> list[str]:
        """Return the names of missing provider settings."""

    async def get_costs(
        self,
        origin: str,
        destination: str,
        weight: int,
        couriers: Sequence[str],
    ) -> dict[str, Any]:
        """Return aggregated costs for every courier."""
