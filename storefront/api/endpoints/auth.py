"""Auth API: register, login (JWT + session cookie), logout and current user."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from storefront.api.dependencies import (
    CurrentUser,
    get_user_repo,
    get_user_repo_for_write,
)
from storefront.core.config import get_settings
from storefront.core.limiter import limit_auth
from storefront.domain.enums import UserRole
from storefront.infrastructure.persistence.repositories.user_repo import UserRepository
from storefront.infrastructure.security.jwt import create_access_token
from storefront.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from storefront.schemas.user import UserResponse

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=201)
@limit_auth
async def register(
    request: Request,
    body: RegisterRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
):
    """Register a customer account (role is always 'user'). Duplicate email -> 409."""
    user = await user_repo.create_user(
        body.email, body.password, name=body.name, role=UserRole.USER.value
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
):
    """Authenticate with email and password; return a JWT and set it as the session cookie."""
    user = await user_repo.authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    settings = get_settings()
    token = create_access_token(
        data={"sub": user.id, "role": user.role, "email": user.email, "name": user.name},
    )
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=not settings.debug,
    )
    return TokenResponse(access_token=token, user=UserResponse.model_validate(user))


@router.post("/logout", status_code=204)
async def logout() -> Response:
    """Clear the session cookie. Tokens are stateless, so nothing else is revoked."""
    response = Response(status_code=204)
    response.delete_cookie(get_settings().session_cookie_name)
    return response


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: CurrentUser,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
):
    """Return the signed-in user (Bearer token or session cookie)."""
    user = await user_repo.get_by_id(current_user.id)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return UserResponse.model_validate(user)
