"""Domain exceptions for the storefront.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. The action
layer turns them into error strings; the presentation layer maps the ones
that escape to HTTP responses in exception handlers.
"""

from typing import Any


class StorefrontException(Exception):
    """Base exception for all storefront errors.

    Attributes:
        message: Human-readable error description, safe to show to a user.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(StorefrontException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(StorefrontException):
    """Raised when authentication fails or is missing (e.g. no session)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(StorefrontException):
    """Raised when the user lacks the role required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'product', 'order').
            action: Optional action that was attempted (e.g. 'delete').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(StorefrontException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ResourceAlreadyExistsException(StorefrontException):
    """Raised when creating a resource whose unique field is already taken."""

    def __init__(self, resource_type: str, field: str, value: str) -> None:
        """Initialize with the conflicting field.

        Args:
            resource_type: Type of resource (e.g. 'category', 'setting').
            field: Unique field that collided (e.g. 'slug', 'key').
            value: The duplicate value.
        """
        super().__init__(
            f"A {resource_type} with this {field} already exists",
            "RESOURCE_ALREADY_EXISTS",
            {"resource_type": resource_type, "field": field, "value": value},
        )


class SqlNotConfiguredException(StorefrontException):
    """Raised when an operation requires the database but DATABASE_URL is unset."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class ShippingProviderNotConfiguredException(StorefrontException):
    """Raised when shipping rates are requested without provider credentials."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"Shipping provider not configured. Missing: {', '.join(missing)}",
            "SHIPPING_NOT_CONFIGURED",
            {"missing": missing},
        )


class ShippingProviderException(StorefrontException):
    """Raised when the shipping provider answers with an error status."""

    def __init__(self, status_code: int, body: str, courier: str | None = None) -> None:
        """Initialize with the provider's HTTP status and raw body.

        Args:
            status_code: HTTP status returned by the provider.
            body: Response body text (truncated by the caller if large).
            courier: Courier code of the failing request, when known.
        """
        message = f"Shipping provider request failed with status {status_code}: {body}"
        details: dict[str, Any] = {"status_code": status_code}
        if courier:
            details["courier"] = courier
        super().__init__(message, "SHIPPING_PROVIDER_ERROR", details)
