"""Category ORM model."""

from sqlalchemy import Boolean, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.infrastructure.persistence.database import Base
from storefront.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Category(CuidMixin, TimestampMixin, Base):
    """Product category. Table: category. Name and slug are unique."""

    __tablename__ = "category"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
    sort_order: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("0")
    )
