"""Core: config, constants, and application bootstrap.

Single place for settings and shared constants.
"""

from storefront.core.config import get_settings

__all__ = ["get_settings"]
