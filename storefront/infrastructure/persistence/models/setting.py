"""Setting ORM model: key/value store for store-wide configuration."""

from typing import Any

from sqlalchemy import JSON, Boolean, ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.infrastructure.persistence.database import Base
from storefront.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Setting(CuidMixin, TimestampMixin, Base):
    """Setting model. Table: app_setting. key is unique; value is any JSON."""

    __tablename__ = "app_setting"

    key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(
        String(32), nullable=False, server_default=text("'general'"), index=True
    )
    is_public: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    updated_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
