"""Profile schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.section import SectionWithItemsResponse

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


def is_valid_username(username: str) -> bool:
    """Usernames may only contain letters, digits and underscores."""
    return bool(USERNAME_PATTERN.match(username))


class ProfileUpdate(BaseModel):
    """Update profile fields; highlights, when given, replace the existing set."""

    model_config = ConfigDict(populate_by_name=True)

    profile_id: str | None = Field(None, alias="profileId")
    name: str | None = Field(None, max_length=255)
    username: str | None = Field(None, max_length=255)
    intro_text: str | None = Field(None, max_length=5000)
    highlights: list[str] | None = None


class UserResponse(BaseModel):
    """Public user fields. Credential hashes are never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    profile_id: str
    username: str
    name: str
    intro_text: str
    profile_picture: str | None
    cover_image: str | None
    created_at: datetime | None = None


class HighlightResponse(BaseModel):
    """Highlight response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    highlight_text: str


class ProfileView(BaseModel):
    """Complete public profile."""

    user: UserResponse
    highlights: list[HighlightResponse]
    sections: list[SectionWithItemsResponse]


class ProfileCreatedResponse(BaseModel):
    """Result of profile creation."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    profile_id: str = Field(alias="profileId")
    user_id: int = Field(alias="userId")


class ProfileLookupResponse(BaseModel):
    """Minimal profile info found by username."""

    model_config = ConfigDict(populate_by_name=True)

    profile_id: str = Field(alias="profileId")
    username: str
    name: str


class MediaUpdatedResponse(BaseModel):
    """Result of replacing a profile image."""

    message: str
    url: str


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
