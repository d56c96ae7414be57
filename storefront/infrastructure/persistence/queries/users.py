"""Cached user reads. Password hashes never leave the repository."""

from typing import Any

from storefront.core.constants import TAG_USERS, record_tag
from storefront.infrastructure.cache.cache_protocol import CacheProtocol
from storefront.infrastructure.cache.decorators import cached
from storefront.infrastructure.persistence.queries._pages import to_json, to_page
from storefront.infrastructure.persistence.repositories.user_repo import UserRepository
from storefront.schemas.user import UserListParams, UserResponse


class UserQueries:
    def __init__(self, repo: UserRepository, cache: CacheProtocol | None = None) -> None:
        self.repo = repo
        self.cache = cache

    @cached("users", tags=(TAG_USERS,))
    async def get_users(self, params: UserListParams) -> dict[str, Any]:
        rows, total = await self.repo.list_users(params)
        return to_page(UserResponse, rows, total, params.per_page)

    @cached("user", tags=lambda user_id: [TAG_USERS, record_tag("user", user_id)])
    async def get_user(self, user_id: str) -> dict[str, Any] | None:
        user = await self.repo.get_by_id(user_id)
        return to_json(UserResponse, user) if user else None

    @cached("user-role-counts", tags=(TAG_USERS,))
    async def get_user_role_counts(self) -> dict[str, int]:
        return await self.repo.count_by_role()
