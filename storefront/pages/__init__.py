"""Server-rendered pages (landing page only)."""

from storefront.pages.root import render_root_page

__all__ = ["render_root_page"]
