"""DTOs for the acting user (no dependency on ORM)."""

from dataclasses import dataclass

from storefront.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model used as the acting principal. No password."""

    id: str
    email: str
    role: str = UserRole.USER.value
    name: str | None = None
    avatar: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
