"""Text normalization helpers for slugs and file names."""

import re

_SLUG_STRIP = re.compile(r"[^a-z0-9\s-]")
_SLUG_SEPARATORS = re.compile(r"[\s_-]+")
_UNSAFE_FILE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def slugify(value: str) -> str:
    """Turn a display name into a URL slug.

    Lower-cases, drops anything but letters, digits, spaces and hyphens,
    then collapses runs of whitespace/hyphens into a single hyphen.

    Args:
        value: Display name, e.g. "Wedding Invitations & Cards".

    Returns:
        Slug such as "wedding-invitations-cards"; empty if nothing survives.
    """
    slug = _SLUG_STRIP.sub("", value.strip().lower())
    slug = _SLUG_SEPARATORS.sub("-", slug)
    return slug.strip("-")


def sanitize_file_name(name: str) -> str:
    """Replace every character outside [a-zA-Z0-9.-] with an underscore."""
    return _UNSAFE_FILE_CHARS.sub("_", name)
