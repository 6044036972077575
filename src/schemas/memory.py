"""Memory schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MemoryResponse(BaseModel):
    """Memory response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    file_path: str
    file_type: str
    original_name: str | None
    caption: str
    created_at: datetime


class MemoryListResponse(BaseModel):
    """Memories of one user, newest first."""

    memories: list[MemoryResponse]


class MemoryCreatedResponse(BaseModel):
    """Stored memory summary."""

    message: str
    id: int
    file_path: str
    file_type: str
