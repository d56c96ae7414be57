"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, repositories, the cache and
storage singletons kept on app.state, the acting user, and the action /
query objects. Routes depend only on these, never on infra directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.actions import (
    CategoryActions,
    OrderActions,
    ProductActions,
    SettingActions,
    ShippingActions,
    UploadActions,
    UserActions,
)
from storefront.application.dtos.user import UserResult
from storefront.core.config import get_settings
from storefront.infrastructure.cache import CacheProtocol, NullCache
from storefront.infrastructure.cache.post_commit import PostCommitInvalidator
from storefront.infrastructure.external.shipping.rajaongkir import RajaOngkirClient
from storefront.infrastructure.external.storage import StorageProtocol, create_storage_service
from storefront.infrastructure.persistence.database import get_db, get_db_transactional
from storefront.infrastructure.persistence.queries import (
    CategoryQueries,
    DashboardQueries,
    OrderQueries,
    ProductQueries,
    SettingQueries,
    UserQueries,
)
from storefront.infrastructure.persistence.repositories import (
    CategoryRepository,
    DashboardRepository,
    OrderRepository,
    ProductRepository,
    SettingRepository,
    UserRepository,
)
from storefront.infrastructure.persistence.repositories.user_repo import user_to_result
from storefront.infrastructure.security.jwt import decode_auth_token

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


# ---- Shared singletons (created in core.lifespan) ----


def get_cache(request: Request) -> CacheProtocol:
    """Cache backend from app.state; NullCache when the lifespan did not run."""
    cache = getattr(request.app.state, "cache", None)
    return cache if cache is not None else NullCache()


def get_storage(request: Request) -> StorageProtocol:
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        storage = create_storage_service()
        request.app.state.storage = storage
    return storage


def get_shipping_provider(request: Request) -> RajaOngkirClient:
    """RajaOngkir client sharing the app's HTTP client (connection reuse)."""
    return RajaOngkirClient.from_settings(
        http_client=getattr(request.app.state, "http_client", None)
    )


Cache = Annotated[CacheProtocol, Depends(get_cache)]
Storage = Annotated[StorageProtocol, Depends(get_storage)]


# ---- Repositories ----


def get_user_repo(db: ReadSession) -> UserRepository:
    return UserRepository(db)


def get_user_repo_for_write(db: WriteSession) -> UserRepository:
    return UserRepository(db)


# ---- Acting user ----

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user_optional(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult | None:
    """Return the user behind the Bearer token or session cookie; None if absent/invalid.

    The role is read from the database, not the token, so demotions apply
    immediately.
    """
    raw = (
        credentials.credentials
        if credentials
        else request.cookies.get(get_settings().session_cookie_name)
    )
    token = decode_auth_token(raw)
    if token is None:
        return None
    user = await user_repo.get_by_id(token.sub)
    return user_to_result(user) if user else None


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user; raise 401 if missing or invalid."""
    if current_user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return current_user


async def require_admin(
    current_user: Annotated[UserResult, Depends(get_current_user)],
) -> UserResult:
    """Return current user when admin; raise 403 otherwise."""
    if not current_user.is_admin:
        raise HTTPException(status_code=403, detail="Forbidden")
    return current_user


OptionalUser = Annotated[UserResult | None, Depends(get_current_user_optional)]
CurrentUser = Annotated[UserResult, Depends(get_current_user)]
AdminUser = Annotated[UserResult, Depends(require_admin)]


# ---- Actions (write session) ----


def get_product_actions(db: WriteSession, cache: Cache, storage: Storage) -> ProductActions:
    return ProductActions(ProductRepository(db), PostCommitInvalidator(cache, db), storage)


def get_category_actions(db: WriteSession, cache: Cache) -> CategoryActions:
    return CategoryActions(CategoryRepository(db), PostCommitInvalidator(cache, db))


def get_order_actions(db: WriteSession, cache: Cache) -> OrderActions:
    return OrderActions(OrderRepository(db), PostCommitInvalidator(cache, db))


def get_user_actions(db: WriteSession, cache: Cache) -> UserActions:
    return UserActions(UserRepository(db), PostCommitInvalidator(cache, db))


def get_setting_actions(db: WriteSession, cache: Cache) -> SettingActions:
    return SettingActions(SettingRepository(db), PostCommitInvalidator(cache, db))


def get_upload_actions(storage: Storage) -> UploadActions:
    return UploadActions(storage, get_settings().max_upload_size)


def get_shipping_actions(
    provider: Annotated[RajaOngkirClient, Depends(get_shipping_provider)],
) -> ShippingActions:
    return ShippingActions(provider)


# ---- Queries (read session) ----


def get_product_queries(db: ReadSession, cache: Cache) -> ProductQueries:
    return ProductQueries(ProductRepository(db), cache)


def get_category_queries(db: ReadSession, cache: Cache) -> CategoryQueries:
    return CategoryQueries(CategoryRepository(db), ProductRepository(db), cache)


def get_order_queries(db: ReadSession, cache: Cache) -> OrderQueries:
    return OrderQueries(OrderRepository(db), cache)


def get_user_queries(db: ReadSession, cache: Cache) -> UserQueries:
    return UserQueries(UserRepository(db), cache)


def get_setting_queries(db: ReadSession, cache: Cache) -> SettingQueries:
    return SettingQueries(SettingRepository(db), cache)


def get_dashboard_queries(db: ReadSession, cache: Cache) -> DashboardQueries:
    return DashboardQueries(DashboardRepository(db), cache)
