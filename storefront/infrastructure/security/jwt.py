"""JWT session tokens.

A token carries the user id (sub), role and email. It is issued on login,
sent back as a Bearer header or the session cookie, and read by the
access-control middleware and the auth dependencies.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from storefront.core.config import get_settings
from storefront.domain.enums import UserRole


@dataclass(frozen=True)
class AuthToken:
    """Decoded session token. Read-only; never refreshed by the server."""

    sub: str
    role: str = UserRole.USER.value
    email: str | None = None
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (sub, role, email, name).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = datetime.now(UTC) + ttl
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Args:
        token: JWT string (Authorization header or session cookie).

    Returns:
        Decoded payload dict.

    Raises:
        ValueError: If token is invalid, expired, or missing exp/sub.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload


def decode_auth_token(token: str | None) -> AuthToken | None:
    """Return the AuthToken for a valid token, or None when absent or invalid."""
    if not token:
        return None
    try:
        payload = verify_token(token)
    except ValueError:
        return None
    return AuthToken(
        sub=str(payload["sub"]),
        role=str(payload.get("role") or UserRole.USER.value),
        email=payload.get("email"),
        name=payload.get("name"),
    )
