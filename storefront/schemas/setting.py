"""Settings API schemas."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.enums import SettingCategory
from storefront.schemas.common import ListParams, id_list, required

SettingIds = id_list("setting")


class SettingCreateRequest(BaseModel):
    key: Annotated[str, Field(max_length=100), required("Key is required")]
    value: str
    category: SettingCategory = SettingCategory.GENERAL
    description: str | None = None
    is_public: bool = False


class SettingUpdateRequest(BaseModel):
    value: str | None = None
    category: SettingCategory | None = None
    description: str | None = None
    is_public: bool | None = None


class SettingByKeyRequest(BaseModel):
    """Upsert a single value by key."""

    key: Annotated[str, required("Key is required")]
    value: str


class SettingsUpdateRequest(BaseModel):
    ids: SettingIds
    category: SettingCategory | None = None
    is_public: bool | None = None


class SettingsDeleteRequest(BaseModel):
    ids: SettingIds


class SettingsByCategoryRequest(BaseModel):
    """Update values of several keys within one category."""

    category: SettingCategory
    updates: dict[str, str]


class SettingListParams(ListParams):
    sort: str = Field(default="key.asc", pattern=r"^[a-z_]+\.(asc|desc)$")
    key: str | None = None
    category: SettingCategory | None = None
    is_public: bool | None = None


class SettingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    key: str
    value: Any = None
    description: str | None = None
    category: str
    is_public: bool = False
    updated_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
