"""Domain enumerations for the storefront.

Enums represent fixed sets of domain values stored as plain strings in
the database (user roles, order and payment status, setting groups).
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for validation or serialization)."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class UserRole(_ValuesMixin, str, Enum):
    """Account role. Only admins may use the dashboard and admin APIs."""

    USER = "user"
    ADMIN = "admin"


class OrderStatus(_ValuesMixin, str, Enum):
    """Order lifecycle status."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PaymentStatus(_ValuesMixin, str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class SettingCategory(_ValuesMixin, str, Enum):
    """Group a setting belongs to; settings can be updated per group."""

    GENERAL = "general"
    PAYMENT = "payment"
    EMAIL = "email"
    STORAGE = "storage"
