"""Shared telemetry: logging setup."""

from storefront.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
