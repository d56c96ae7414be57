"""Infrastructure exceptions for storage operations.

Storage errors extend StorefrontException so the action layer and the
presentation layer report them consistently.
"""

from storefront.domain.exceptions import StorefrontException


class StorageException(StorefrontException):
    """Base exception for storage operations."""


class StorageNotFoundError(StorageException):
    """File or object not found in storage."""

    def __init__(self, storage_ref: str) -> None:
        super().__init__(
            f"File not found: {storage_ref}",
            "STORAGE_NOT_FOUND",
            {"storage_ref": storage_ref},
        )


class StorageUploadError(StorageException):
    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload file: {storage_ref}",
            "STORAGE_UPLOAD_ERROR",
            {"storage_ref": storage_ref, "reason": reason},
        )


class StorageDeleteError(StorageException):
    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {storage_ref}",
            "STORAGE_DELETE_ERROR",
            {"storage_ref": storage_ref, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Storage reference escapes the storage root (path traversal)."""

    def __init__(self, storage_ref: str) -> None:
        super().__init__(
            f"Access denied for storage reference: {storage_ref}",
            "STORAGE_PERMISSION_ERROR",
            {"storage_ref": storage_ref},
        )
