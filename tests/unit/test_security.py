"""Tests for password hashing and session tokens."""

from datetime import timedelta

import pytest

from storefront.domain.exceptions import (
    AuthorizationException,
    ResourceAlreadyExistsException,
    ShippingProviderNotConfiguredException,
    ValidationException,
)
from storefront.infrastructure.security import (
    PasswordHasher,
    create_access_token,
    decode_auth_token,
    verify_token,
)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


def test_hash_and_verify(hasher: PasswordHasher) -> None:
    hashed = hasher.hash("correct horse")
    assert hashed != "correct horse"
    assert hasher.verify("correct horse", hashed)
    assert not hasher.verify("wrong horse", hashed)
    assert not hasher.verify("correct horse", None)
    assert not hasher.verify("correct horse", "not-a-bcrypt-hash")


def test_long_passwords_are_not_truncated(hasher: PasswordHasher) -> None:
    hashed = hasher.hash("a" * 80)
    assert not hasher.verify("a" * 72, hashed)


async def test_verify_missing_is_always_false(hasher: PasswordHasher) -> None:
    assert await hasher.verify_missing(PasswordHasher._DUMMY_PASSWORD) is False


def test_token_round_trip_keeps_role() -> None:
    token = create_access_token({"sub": "u1", "role": "admin", "email": "a@example.com"})
    decoded = decode_auth_token(token)

    assert decoded is not None
    assert decoded.sub == "u1"
    assert decoded.is_admin
    assert decoded.email == "a@example.com"


def test_role_defaults_to_user() -> None:
    decoded = decode_auth_token(create_access_token({"sub": "u1"}))
    assert decoded is not None and not decoded.is_admin


@pytest.mark.parametrize("raw", [None, "", "garbage", "a.b.c"])
def test_invalid_tokens_decode_to_none(raw) -> None:
    assert decode_auth_token(raw) is None


def test_expired_token_is_rejected() -> None:
    token = create_access_token({"sub": "u1"}, expires_delta=timedelta(seconds=-5))
    with pytest.raises(ValueError):
        verify_token(token)
    assert decode_auth_token(token) is None


def test_exception_payloads() -> None:
    assert ValidationException("Bad", field="price").to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "Bad",
        "details": {"field": "price"},
    }
    assert AuthorizationException("product", "delete").message == (
        "Permission denied: delete on product"
    )
    assert ResourceAlreadyExistsException("category", "slug", "art").message == (
        "A category with this slug already exists"
    )
    assert ShippingProviderNotConfiguredException(["A", "B"]).details == {"missing": ["A", "B"]}
