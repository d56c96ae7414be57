"""Upload action: admin-only file upload to object storage."""

import logging
from typing import Any

from storefront.application.actions.guards import require_admin
from storefront.application.actions.resource import action
from storefront.application.dtos.upload import UploadResult
from storefront.application.dtos.user import UserResult
from storefront.application.interfaces.services import IFileStorage
from storefront.domain.exceptions import ValidationException
from storefront.shared.utils.files import (
    ALLOWED_DESIGN_TYPES,
    ALLOWED_IMAGE_TYPES,
    generate_file_key,
    validate_file_type,
)

logger = logging.getLogger(__name__)

# "image" for product pictures, "product" for the downloadable design file.
UPLOAD_TYPES: dict[str, frozenset[str]] = {
    "image": ALLOWED_IMAGE_TYPES,
    "product": ALLOWED_DESIGN_TYPES,
}


class UploadActions:
    def __init__(self, storage: IFileStorage, max_size: int) -> None:
        self.storage = storage
        self.max_size = max_size

    @action
    async def upload_file(
        self,
        principal: UserResult | None,
        file_name: str | None,
        content_type: str | None,
        data: bytes,
        upload_type: str = "image",
    ) -> UploadResult:
        """Validate and store one file under uploads/<user>/<ms>_<name>.

        Raises (turned into an error result):
            AuthenticationException: Signed out.
            AuthorizationException: Not an admin.
            ValidationException: Missing name, unknown upload type, disallowed
                MIME type, empty or oversized file.
        """
        user = require_admin(principal, "Unauthorized", "Unauthorized")
        if not file_name:
            raise ValidationException("A file name is required", field="file")
        allowed = UPLOAD_TYPES.get(upload_type)
        if allowed is None:
            raise ValidationException(
                'Invalid upload type. Must be "image" or "product"', field="upload_type"
            )
        if not validate_file_type(content_type, allowed):
            raise ValidationException(
                f"Invalid file type. Allowed types: {', '.join(sorted(allowed))}",
                field="file",
            )
        if not data:
            raise ValidationException("File is empty", field="file")
        if len(data) > self.max_size:
            raise ValidationException(
                f"File exceeds the maximum size of {self.max_size} bytes", field="file"
            )
        key = generate_file_key(file_name, user.id)
        mime = (content_type or "").split(";", 1)[0].strip().lower()
        stored: dict[str, Any] = await self.storage.upload(
            data, key, mime, metadata={"uploaded_by": user.id}
        )
        logger.info("Stored upload %s (%d bytes) for %s", key, len(data), user.id)
        return UploadResult(
            key=key,
            url=stored.get("url") or self.storage.public_url(key),
            size=int(stored.get("size", len(data))),
            content_type=mime,
        )
