"""Session and role checks shared by the per-resource actions."""

from storefront.application.dtos.user import UserResult
from storefront.domain.exceptions import AuthenticationException, AuthorizationException


def require_user(principal: UserResult | None, message: str) -> UserResult:
    """Return the principal, or raise AuthenticationException(message) when signed out."""
    if principal is None or not principal.id:
        raise AuthenticationException(message)
    return principal


def require_admin(principal: UserResult | None, login_message: str, denied_message: str) -> UserResult:
    """Return the principal when it is an admin.

    Raises:
        AuthenticationException: No principal (login_message).
        AuthorizationException: Principal is not an admin (denied_message).
    """
    user = require_user(principal, login_message)
    if not user.is_admin:
        raise AuthorizationException(message=denied_message)
    return user


def require_owner_or_admin(
    principal: UserResult, owner_id: str | None, denied_message: str
) -> None:
    """Allow admins and the record's creator; raise AuthorizationException otherwise."""
    if not principal.is_admin and owner_id != principal.id:
        raise AuthorizationException(message=denied_message)
