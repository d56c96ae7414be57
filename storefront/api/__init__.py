"""HTTP API: routers, dependencies and response mapping."""

from storefront.api.router import api_router

__all__ = ["api_router"]
