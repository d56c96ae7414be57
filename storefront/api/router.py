"""API router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from storefront.api.dependencies.
"""

from fastapi import APIRouter

from storefront.api.endpoints import (
    auth,
    categories,
    dashboard,
    health,
    orders,
    products,
    settings,
    shipping,
    upload,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(upload.router, prefix="/upload", tags=["upload"])
api_router.include_router(shipping.router, prefix="/shipping", tags=["shipping"])
api_router.include_router(dashboard.router, prefix="/admin/dashboard", tags=["dashboard"])
