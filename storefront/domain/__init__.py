"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from storefront.domain.enums import (
    OrderStatus,
    PaymentStatus,
    SettingCategory,
    UserRole,
)
from storefront.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    ShippingProviderException,
    ShippingProviderNotConfiguredException,
    SqlNotConfiguredException,
    StorefrontException,
    ValidationException,
)

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "OrderStatus",
    "PaymentStatus",
    "ResourceAlreadyExistsException",
    "ResourceNotFoundException",
    "SettingCategory",
    "ShippingProviderException",
    "ShippingProviderNotConfiguredException",
    "SqlNotConfiguredException",
    "StorefrontException",
    "UserRole",
    "ValidationException",
]
