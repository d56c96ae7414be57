"""Storage service protocol. Implementations: LocalStorageService, S3StorageService."""

from datetime import timedelta
from typing import Any, Protocol


class StorageProtocol(Protocol):
    """Protocol for object storage backends (local, S3-compatible)."""

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Store bytes; return storage_ref, checksum, size and url."""
        ...

    async def delete(self, storage_ref: str) -> bool:
        """Delete file. Returns True if deleted, False if not found."""
        ...

    async def exists(self, storage_ref: str) -> bool:
        ...

    async def generate_download_url(
        self,
        storage_ref: str,
        expiration: timedelta = timedelta(hours=1),
    ) -> str:
        """Return temporary download URL (presigned for S3, public path for local)."""
        ...

    def public_url(self, storage_ref: str) -> str:
        """Return the permanent public URL of storage_ref."""
        ...

    def ref_for_url(self, url: str) -> str | None:
        """Return the storage_ref behind a public URL, or None if it is not ours."""
        ...
