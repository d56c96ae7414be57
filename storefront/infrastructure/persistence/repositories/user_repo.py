"""User repository with password helpers."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.dtos.user import UserResult
from storefront.core.config import get_settings
from storefront.domain.enums import UserRole
from storefront.domain.exceptions import ResourceAlreadyExistsException
from storefront.infrastructure.persistence.models.user import User
from storefront.infrastructure.persistence.repositories._sorting import apply_sort
from storefront.infrastructure.persistence.repositories.base import BaseRepository
from storefront.infrastructure.security.passwords import PasswordHasher
from storefront.schemas.user import UserListParams

_SORTABLE = frozenset({"email", "name", "role", "created_at", "updated_at"})


def user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(id=u.id, email=u.email, role=u.role, name=u.name, avatar=u.avatar)


class UserRepository(BaseRepository[User]):
    """User repository. Authenticate, create_user, set_password, listings."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher | None = None) -> None:
        super().__init__(db, User)
        self.hasher = hasher or PasswordHasher(get_settings().bcrypt_rounds)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when email and password match, else None.

        Unknown emails still pay for one bcrypt comparison.
        """
        user = await self.get_by_email(email)
        if user is None:
            await self.hasher.verify_missing(password)
            return None
        if not await self.hasher.verify_async(password, user.hashed_password):
            return None
        return user

    async def create_user(
        self,
        email: str,
        password: str,
        *,
        name: str | None = None,
        role: str = UserRole.USER.value,
        avatar: str | None = None,
    ) -> User:
        """Create a user with a hashed password.

        Raises:
            ResourceAlreadyExistsException: Email already registered.
        """
        if await self.get_by_email(email) is not None:
            raise ResourceAlreadyExistsException("user", "email", email)
        user = User(
            email=email.strip().lower(),
            name=name,
            role=role,
            avatar=avatar,
            hashed_password=await self.hasher.hash_async(password),
        )
        try:
            async with self.db.begin_nested():
                return await self.create(user)
        except IntegrityError as e:
            raise ResourceAlreadyExistsException("user", "email", email) from e

    async def set_password(self, user_id: str, password: str) -> None:
        hashed = await self.hasher.hash_async(password)
        await self.update_by_key(user_id, {"hashed_password": hashed})

    async def list_users(self, params: UserListParams) -> tuple[list[User], int]:
        stmt = select(User)
        if params.email:
            stmt = stmt.where(User.email.ilike(f"%{params.email}%"))
        if params.role is not None:
            stmt = stmt.where(User.role == params.role.value)
        field, descending = params.sort_field()
        stmt = apply_sort(stmt, User, field, descending, _SORTABLE)
        return await self.paginate(stmt, params.page, params.per_page)

    async def count_by_role(self) -> dict[str, int]:
        """Return {role: count} including zero counts for known roles."""
        result = await self.db.execute(select(User.role, func.count(User.id)).group_by(User.role))
        counts: dict[str, Any] = {role: 0 for role in UserRole.values()}
        counts.update({role: int(count) for role, count in result.all()})
        return counts
