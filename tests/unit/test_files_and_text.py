"""Tests for upload key / MIME helpers, slugs and generated identifiers."""

import re

import pytest

from storefront.shared.utils import (
    generate_cuid,
    generate_order_number,
    sanitize_file_name,
    slugify,
)
from storefront.shared.utils.files import (
    ALLOWED_DESIGN_TYPES,
    ALLOWED_IMAGE_TYPES,
    generate_file_key,
    validate_file_type,
)


def test_generate_file_key_layout() -> None:
    key = generate_file_key("my file (1).png", "user-1", now_ms=1700000000000)
    assert key == "uploads/user-1/1700000000000_my_file__1_.png"


def test_generate_file_key_defaults_to_current_time() -> None:
    assert re.fullmatch(r"uploads/u/\d{13}_a.pdf", generate_file_key("a.pdf", "u"))


def test_sanitize_file_name_keeps_dots_and_hyphens() -> None:
    assert sanitize_file_name("../etc/pass wd-1.txt") == ".._etc_pass_wd-1.txt"


@pytest.mark.parametrize(
    ("content_type", "allowed", "expected"),
    [
        ("image/png", ALLOWED_IMAGE_TYPES, True),
        ("IMAGE/JPEG", ALLOWED_IMAGE_TYPES, True),
        ("image/svg+xml; charset=utf-8", ALLOWED_IMAGE_TYPES, True),
        ("application/pdf", ALLOWED_IMAGE_TYPES, False),
        ("application/pdf", ALLOWED_DESIGN_TYPES, True),
        ("application/postscript", ALLOWED_DESIGN_TYPES, True),
        ("text/html", ALLOWED_DESIGN_TYPES, False),
        (None, ALLOWED_DESIGN_TYPES, False),
        ("", ALLOWED_IMAGE_TYPES, False),
    ],
)
def test_validate_file_type(content_type, allowed, expected: bool) -> None:
    assert validate_file_type(content_type, allowed) is expected


@pytest.mark.parametrize(
    ("name", "slug"),
    [
        ("Wedding Invitations & Cards", "wedding-invitations-cards"),
        ("  Posters  ", "posters"),
        ("Art_Prints--Large", "artprints-large"),
        ("!!!", ""),
    ],
)
def test_slugify(name: str, slug: str) -> None:
    assert slugify(name) == slug


def test_generate_order_number_format() -> None:
    assert re.fullmatch(r"ORD-\d{8}-[A-Z0-9]{6}", generate_order_number())


def test_generate_cuid_is_unique() -> None:
    assert len({generate_cuid() for _ in range(50)}) == 50
