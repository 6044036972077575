"""Content item schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from src.models.enums import ContentCategory


class ContentItemResponse(BaseModel):
    """Content item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    category: ContentCategory
    title: str | None
    icon: str | None
    color: str | None
    description: str | None
    file_path: str | None
    file_type: str | None
    created_at: datetime | None = None


class ContentListResponse(BaseModel):
    """Content items of one category."""

    items: list[ContentItemResponse]


class ContentCreatedResponse(BaseModel):
    """Message plus the new row's id."""

    message: str
    id: int
