"""User API schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from storefront.domain.enums import UserRole
from storefront.schemas.common import ListParams, id_list, required

UserIds = id_list("user")


class UserCreateRequest(BaseModel):
    """Request body for creating a user (admin)."""

    name: Annotated[str, required("Name is required")]
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.USER


class UserUpdateRequest(BaseModel):
    """Partial update; password is re-hashed when present."""

    name: Annotated[str, required("Name is required")] | None = None
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8)
    role: UserRole | None = None
    avatar: str | None = None


class UsersDeleteRequest(BaseModel):
    ids: UserIds


class UsersUpdateRequest(BaseModel):
    """Bulk role change."""

    ids: UserIds
    role: UserRole | None = None


class UserListParams(ListParams):
    email: str | None = None
    role: UserRole | None = None


class UserResponse(BaseModel):
    """User response (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str | None = None
    role: str
    avatar: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
