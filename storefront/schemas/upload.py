"""Upload API schemas."""

from pydantic import BaseModel, ConfigDict


class UploadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    url: str
    size: int
    content_type: str
