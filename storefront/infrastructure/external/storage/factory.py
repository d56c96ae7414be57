"""Build the configured storage backend (uploads, product images and files)."""

from collections.abc import Callable

from storefront.core.config import Settings, get_settings
from storefront.infrastructure.external.storage.local_storage import LocalStorageService
from storefront.infrastructure.external.storage.protocol import StorageProtocol
from storefront.infrastructure.external.storage.s3_storage import S3StorageService


def _local(s: Settings) -> StorageProtocol:
    # Files are served by the app itself under /files, so URLs use the API origin.
    return LocalStorageService(storage_root=s.storage_root, base_url=s.storage_base_url)


def _s3(s: Settings) -> StorageProtocol:
    if not s.s3_bucket:
        raise ValueError("S3_BUCKET is required for the s3 storage backend")
    return S3StorageService(
        bucket=s.s3_bucket,
        region=s.s3_region,
        endpoint_url=s.s3_endpoint_url,
        access_key=s.s3_access_key,
        secret_key=s.s3_secret_key.get_secret_value() if s.s3_secret_key else None,
        public_url=s.s3_public_url,
    )


STORAGE_BACKENDS: dict[str, Callable[[Settings], StorageProtocol]] = {
    "local": _local,
    "s3": _s3,
}


def create_storage_service(settings: Settings | None = None) -> StorageProtocol:
    """Return the backend named by settings.storage_backend.

    Raises:
        ValueError: Unknown backend, or s3 without a bucket.
    """
    s = settings or get_settings()
    backend = s.storage_backend.lower()
    build = STORAGE_BACKENDS.get(backend)
    if build is None:
        raise ValueError(
            f"Unknown storage backend: {backend!r}. Supported: {', '.join(STORAGE_BACKENDS)}"
        )
    return build(s)
