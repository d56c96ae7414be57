"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from storefront.infrastructure.
"""

from storefront.application.interfaces.repositories import (
    ICategoryRepository,
    IKeyedResourceStore,
    IOrderRepository,
    IProductRepository,
    ISettingRepository,
    IUserRepository,
)
from storefront.application.interfaces.services import (
    ICacheInvalidator,
    IFileStorage,
    IShippingRateProvider,
)

__all__ = [
    "ICacheInvalidator",
    "ICategoryRepository",
    "IFileStorage",
    "IKeyedResourceStore",
    "IOrderRepository",
    "IProductRepository",
    "ISettingRepository",
    "IShippingRateProvider",
    "IUserRepository",
]
