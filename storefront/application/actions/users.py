"""User actions (admin only). Passwords are hashed by the repository."""

from collections.abc import Sequence
from typing import Any

from storefront.application.actions.guards import require_admin
from storefront.application.actions.resource import (
    ActionResult,
    action,
    delete_multiple,
    delete_single,
    parse_input,
    take_first,
)
from storefront.application.dtos.user import UserResult
from storefront.application.interfaces.repositories import IUserRepository
from storefront.application.interfaces.services import ICacheInvalidator
from storefront.core.constants import TAG_USERS, record_tag
from storefront.domain.exceptions import ResourceAlreadyExistsException, ValidationException
from storefront.schemas.user import (
    UserCreateRequest,
    UsersDeleteRequest,
    UsersUpdateRequest,
    UserUpdateRequest,
)

SELF_DELETE_MESSAGE = "You cannot delete your own account"


class UserActions:
    def __init__(self, repo: IUserRepository, cache: ICacheInvalidator) -> None:
        self.repo = repo
        self.cache = cache

    def _admin(self, principal: UserResult | None) -> UserResult:
        return require_admin(
            principal,
            "You must be logged in to manage users",
            "You don't have permission to manage users",
        )

    async def _invalidate(self, user_ids: Sequence[str] = ()) -> None:
        await self.cache.invalidate(TAG_USERS)
        for user_id in user_ids:
            await self.cache.invalidate(record_tag("user", user_id))

    @action
    async def create_user(
        self, principal: UserResult | None, payload: UserCreateRequest | dict[str, Any]
    ) -> Any:
        self._admin(principal)
        data = parse_input(UserCreateRequest, payload)
        user = await self.repo.create_user(
            data.email, data.password, name=data.name, role=data.role.value
        )
        await self._invalidate()
        return user

    @action
    async def update_user(
        self,
        principal: UserResult | None,
        user_id: str,
        payload: UserUpdateRequest | dict[str, Any],
    ) -> Any:
        """Apply a partial update; a new password is hashed before it is stored."""
        self._admin(principal)
        data = parse_input(UserUpdateRequest, payload)
        values = data.model_dump(mode="json", exclude_unset=True, exclude={"password"})
        if values.get("email"):
            values["email"] = values["email"].strip().lower()
            other = await self.repo.get_by_email(values["email"])
            if other is not None and other.id != user_id:
                raise ResourceAlreadyExistsException("user", "email", values["email"])
        async with self.repo.transaction():
            if values:
                user = take_first(await self.repo.update_by_key(user_id, values))
            else:
                user = await self.repo.get_by_id(user_id)
            if user is None:
                raise ValidationException("User not found", field="id")
            if data.password:
                await self.repo.set_password(user_id, data.password)
        await self._invalidate([user_id])
        return user

    @action
    async def update_users(
        self, principal: UserResult | None, payload: UsersUpdateRequest | dict[str, Any]
    ) -> list[Any]:
        self._admin(principal)
        data = parse_input(UsersUpdateRequest, payload)
        if data.role is None:
            return []
        updated = await self.repo.update_by_key_set(data.ids, {"role": data.role.value})
        await self._invalidate(data.ids)
        return updated

    @action
    async def delete_user(self, principal: UserResult | None, user_id: str) -> ActionResult[Any]:
        admin = self._admin(principal)

        async def not_self(resource_id: str) -> None:
            if resource_id == admin.id:
                raise ValidationException(SELF_DELETE_MESSAGE, field="id")

        return await delete_single(
            self.repo,
            user_id,
            revalidate_tag=TAG_USERS,
            cache=self.cache,
            pre_delete=not_self,
        )

    @action
    async def delete_users(
        self, principal: UserResult | None, payload: UsersDeleteRequest | dict[str, Any]
    ) -> ActionResult[list[Any]]:
        admin = self._admin(principal)
        data = parse_input(UsersDeleteRequest, payload)

        async def not_self(resource_ids: Sequence[str]) -> None:
            if admin.id in resource_ids:
                raise ValidationException(SELF_DELETE_MESSAGE, field="ids")

        return await delete_multiple(
            self.repo,
            data.ids,
            revalidate_tag=TAG_USERS,
            cache=self.cache,
            pre_delete=not_self,
        )
