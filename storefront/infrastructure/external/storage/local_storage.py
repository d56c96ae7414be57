"""Local filesystem storage with path validation and atomic writes.

Files are served by the app under /files (see main.create_app), so the
public URL of a key is <base_url>/files/<key>.
"""

from __future__ import annotations

import hashlib
import os
import tempfile
from datetime import timedelta
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from storefront.infrastructure.exceptions import (
    StorageDeleteError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)
from storefront.shared.utils.datetime import utc_now

PUBLIC_MOUNT = "/files"


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection."""

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files (created if missing).
            base_url: Public origin of the API (e.g. https://shop.example.com).
        """
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else ""
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref) from e
        return full_path

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Write bytes through a temp file + rename so readers never see partial files."""
        target_path = self._get_full_path(storage_ref)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent, prefix=".tmp_", suffix=target_path.suffix
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(file_data)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return {
            "storage_ref": storage_ref,
            "checksum": hashlib.sha256(file_data).hexdigest(),
            "size": len(file_data),
            "content_type": content_type,
            "uploaded_at": utc_now().isoformat(),
            "url": self.public_url(storage_ref),
        }

    async def delete(self, storage_ref: str) -> bool:
        """Delete file and prune empty parent directories. Returns True if deleted."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except OSError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e
        parent = file_path.parent
        while parent != self.storage_root:
            try:
                parent.rmdir()
            except OSError:
                break
            parent = parent.parent
        return True

    async def exists(self, storage_ref: str) -> bool:
        try:
            return self._get_full_path(storage_ref).is_file()
        except StoragePermissionError:
            return False

    async def generate_download_url(
        self,
        storage_ref: str,
        expiration: timedelta = timedelta(hours=1),
    ) -> str:
        """Return the public URL (local files do not expire)."""
        if not await self.exists(storage_ref):
            raise StorageNotFoundError(storage_ref)
        return self.public_url(storage_ref)

    def public_url(self, storage_ref: str) -> str:
        return f"{self.base_url}{PUBLIC_MOUNT}/{storage_ref}"

    def ref_for_url(self, url: str) -> str | None:
        prefix = f"{self.base_url}{PUBLIC_MOUNT}/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix):] or None
