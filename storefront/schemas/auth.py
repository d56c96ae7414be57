"""Auth API schemas."""

from typing import Annotated

from pydantic import BaseModel, EmailStr, Field

from storefront.schemas.common import required
from storefront.schemas.user import UserResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """Request body for public registration (role is always 'user')."""

    name: Annotated[str, required("Name is required")]
    email: EmailStr
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")


class TokenResponse(BaseModel):
    """JWT token response; the same token is also set as the session cookie."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
