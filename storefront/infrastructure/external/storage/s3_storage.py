"""S3-compatible object storage (Cloudflare R2, AWS S3, MinIO)."""

from __future__ import annotations

import asyncio
import hashlib
from datetime import timedelta
from typing import Any

import boto3
from botocore.exceptions import ClientError

from storefront.infrastructure.exceptions import (
    StorageDeleteError,
    StorageNotFoundError,
    StorageUploadError,
)
from storefront.shared.utils.datetime import utc_now


def _is_missing(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in {"404", "NoSuchKey", "NotFound"}


class S3StorageService:
    """S3-compatible storage.

    Uses boto3 (sync) via asyncio.to_thread for the async API. Public URLs
    are built from public_url (e.g. an R2 custom domain) when set, else
    from the endpoint and bucket.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "auto",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        public_url: str | None = None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )
        if public_url:
            self.public_base = public_url.rstrip("/")
        elif endpoint_url:
            self.public_base = f"{endpoint_url.rstrip('/')}/{bucket}"
        else:
            self.public_base = f"https://{bucket}.s3.{region}.amazonaws.com"

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        checksum = hashlib.sha256(file_data).hexdigest()
        meta = {"sha256": checksum}
        for k, v in (metadata or {}).items():
            meta[k.lower().replace("_", "-")] = v

        def _put() -> None:
            self._client.put_object(
                Bucket=self.bucket,
                Key=storage_ref,
                Body=file_data,
                ContentType=content_type,
                Metadata=meta,
            )

        try:
            await asyncio.to_thread(_put)
        except ClientError as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return {
            "storage_ref": storage_ref,
            "checksum": checksum,
            "size": len(file_data),
            "content_type": content_type,
            "uploaded_at": utc_now().isoformat(),
            "url": self.public_url(storage_ref),
        }

    async def delete(self, storage_ref: str) -> bool:
        """Delete object. Returns True if it existed."""

        def _delete() -> bool:
            try:
                self._client.head_object(Bucket=self.bucket, Key=storage_ref)
            except ClientError as e:
                if _is_missing(e):
                    return False
                raise
            self._client.delete_object(Bucket=self.bucket, Key=storage_ref)
            return True

        try:
            return await asyncio.to_thread(_delete)
        except ClientError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e

    async def exists(self, storage_ref: str) -> bool:
        def _exists() -> bool:
            try:
                self._client.head_object(Bucket=self.bucket, Key=storage_ref)
                return True
            except ClientError:
                return False

        return await asyncio.to_thread(_exists)

    async def generate_download_url(
        self,
        storage_ref: str,
        expiration: timedelta = timedelta(hours=1),
    ) -> str:
        """Return presigned GET URL."""
        if not await self.exists(storage_ref):
            raise StorageNotFoundError(storage_ref)
        return await asyncio.to_thread(
            self._client.generate_presigned_url,
            "get_object",
            Params={"Bucket": self.bucket, "Key": storage_ref},
            ExpiresIn=int(expiration.total_seconds()),
        )

    def public_url(self, storage_ref: str) -> str:
        return f"{self.public_base}/{storage_ref}"

    def ref_for_url(self, url: str) -> str | None:
        prefix = f"{self.public_base}/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix):] or None
