"""Product API schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.common import ListParams, id_list, money, required

ProductIds = id_list("product")
Price = Annotated[str, money("Please enter a valid price")]


class ProductCreateRequest(BaseModel):
    """Request body for creating a product."""

    title: Annotated[str, Field(max_length=200), required("Title is required")]
    description: Annotated[str, Field(max_length=2000), required("Description is required")]
    price: Price
    category_id: str | None = None
    category: Annotated[str, Field(max_length=100), required("Category is required")]
    tags: list[str] = Field(default_factory=list)
    image_url: str | None = None
    file_url: str | None = None
    file_name: str | None = Field(default=None, max_length=255)
    file_size: int | None = Field(default=None, ge=1)
    is_active: bool = True


class ProductUpdateRequest(BaseModel):
    """Partial update; only fields that are set are written."""

    title: Annotated[str, Field(max_length=200), required("Title is required")] | None = None
    description: Annotated[str, Field(max_length=2000)] | None = None
    price: Price | None = None
    category_id: str | None = None
    category: Annotated[str, Field(max_length=100)] | None = None
    tags: list[str] | None = None
    image_url: str | None = None
    file_url: str | None = None
    file_name: str | None = Field(default=None, max_length=255)
    file_size: int | None = Field(default=None, ge=1)
    is_active: bool | None = None


class ProductsDeleteRequest(BaseModel):
    ids: ProductIds


class ProductsUpdateRequest(BaseModel):
    """Bulk activate/deactivate."""

    ids: ProductIds
    is_active: bool | None = None


class ProductListParams(ListParams):
    """Filters for the product list (title is a case-insensitive substring)."""

    title: str | None = None
    category: str | None = None
    is_active: bool | None = None


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    price: Decimal
    category_id: str | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    image_url: str | None = None
    file_url: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    download_count: int = 0
    is_active: bool = True
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
