"""Application DTOs (no ORM dependency)."""

from storefront.application.dtos.upload import UploadResult
from storefront.application.dtos.user import UserResult

__all__ = ["UploadResult", "UserResult"]
