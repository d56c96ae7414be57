"""Upload object keys and MIME-type rules."""

from collections.abc import Collection

from storefront.shared.utils.datetime import utc_now_ms
from storefront.shared.utils.text import sanitize_file_name

ALLOWED_IMAGE_TYPES: frozenset[str] = frozenset(
    {"image/jpeg", "image/png", "image/webp", "image/svg+xml"}
)

ALLOWED_DESIGN_TYPES: frozenset[str] = ALLOWED_IMAGE_TYPES | {
    "application/pdf",
    "image/eps",
    "application/postscript",
}

UPLOAD_PREFIX = "uploads"


def generate_file_key(original_name: str, user_id: str, now_ms: int | None = None) -> str:
    """Build the object key for an upload.

    Args:
        original_name: Client-supplied file name.
        user_id: Uploading user's id.
        now_ms: Millisecond timestamp; defaults to now.

    Returns:
        Key such as 'uploads/<user_id>/1700000000000_my_file.png'.
    """
    timestamp = utc_now_ms() if now_ms is None else now_ms
    return f"{UPLOAD_PREFIX}/{user_id}/{timestamp}_{sanitize_file_name(original_name)}"


def validate_file_type(content_type: str | None, allowed: Collection[str]) -> bool:
    """Return True when content_type (parameters ignored) is in allowed."""
    if not content_type:
        return False
    return content_type.split(";", 1)[0].strip().lower() in allowed
