"""Shared utilities: datetime, generators, text."""

from storefront.shared.utils.datetime import utc_now, utc_now_ms
from storefront.shared.utils.generators import generate_cuid, generate_order_number
from storefront.shared.utils.text import sanitize_file_name, slugify

__all__ = [
    "generate_cuid",
    "generate_order_number",
    "sanitize_file_name",
    "slugify",
    "utc_now",
    "utc_now_ms",
]
