"""Section schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from src.services.attachments import decode_attachments


class SectionCreate(BaseModel):
    """Create a new section."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    icon: str | None = Field(None, max_length=100)
    profile_id: str | None = Field(None, alias="profileId")
    user_id: int | None = Field(None, alias="userId")


class SectionUpdate(BaseModel):
    """Update a section's name and icon."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, min_length=1, max_length=255)
    icon: str | None = Field(None, max_length=100)
    profile_id: str | None = Field(None, alias="profileId")


class AttachmentResponse(BaseModel):
    """One file attached to a section item."""

    path: str
    type: str


class SectionItemResponse(BaseModel):
    """Section item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    section_id: int
    title: str | None
    icon: str | None
    description: str | None
    file_path: str | None
    file_type: str | None
    created_at: datetime | None = None

    @computed_field
    @property
    def files(self) -> list[AttachmentResponse]:
        return [
            AttachmentResponse(path=a.path, type=a.type)
            for a in decode_attachments(self.file_path, self.file_type)
        ]


class SectionResponse(BaseModel):
    """Section response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    icon: str | None
    section_order: int
    created_at: datetime | None = None


class SectionWithItemsResponse(SectionResponse):
    """Section with its items, as shown on a profile page."""

    items: list[SectionItemResponse] = []


class SectionCreateResponse(BaseModel):
    """Created section summary."""

    id: int
    name: str
    icon: str | None


class SectionListResponse(BaseModel):
    """Sections of one user."""

    sections: list[SectionResponse]


class SectionItemListResponse(BaseModel):
    """Items of one section."""

    items: list[SectionItemResponse]
