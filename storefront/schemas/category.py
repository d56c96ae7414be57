"""Category API schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.common import ListParams, id_list, required

SLUG_PATTERN = r"^[a-z0-9-]*$"

CategoryIds = id_list("category")
Slug = Annotated[str, Field(max_length=100, pattern=SLUG_PATTERN)]


class CategoryCreateRequest(BaseModel):
    """Request body for creating a category. Slug is derived from name when omitted."""

    name: Annotated[str, Field(max_length=100), required("Name is required")]
    slug: Slug | None = None
    description: str | None = Field(default=None, max_length=500)
    image_url: str | None = None
    is_active: bool = True
    sort_order: int = Field(default=0, ge=0)


class CategoryUpdateRequest(BaseModel):
    name: Annotated[str, Field(max_length=100), required("Name is required")] | None = None
    slug: Slug | None = None
    description: str | None = Field(default=None, max_length=500)
    image_url: str | None = None
    is_active: bool | None = None
    sort_order: int | None = Field(default=None, ge=0)


class CategoriesDeleteRequest(BaseModel):
    ids: CategoryIds


class CategoriesUpdateRequest(BaseModel):
    ids: CategoryIds
    is_active: bool | None = None
    sort_order: int | None = Field(default=None, ge=0)


class CategoryListParams(ListParams):
    sort: str = Field(default="sort_order.asc", pattern=r"^[a-z_]+\.(asc|desc)$")
    name: str | None = None
    is_active: bool | None = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    description: str | None = None
    image_url: str | None = None
    is_active: bool = True
    sort_order: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
