"""DTOs for file uploads."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadResult:
    """Stored object: key in the bucket, public URL, size and MIME type."""

    key: str
    url: str
    size: int
    content_type: str
