"""Security: JWT session tokens and password hashing."""

from storefront.infrastructure.security.jwt import (
    AuthToken,
    create_access_token,
    decode_auth_token,
    verify_token,
)
from storefront.infrastructure.security.passwords import PasswordHasher

__all__ = [
    "AuthToken",
    "PasswordHasher",
    "create_access_token",
    "decode_auth_token",
    "verify_token",
]
