"""Object storage: local filesystem and S3-compatible backends."""

from storefront.infrastructure.external.storage.factory import create_storage_service
from storefront.infrastructure.external.storage.protocol import StorageProtocol

__all__ = [
    "StorageProtocol",
    "create_storage_service",
]
