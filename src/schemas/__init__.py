"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import ForgotPasswordRequest, LoginRequest, TokenResponse
from src.schemas.content import ContentCreatedResponse, ContentItemResponse, ContentListResponse
from src.schemas.memory import MemoryCreatedResponse, MemoryListResponse, MemoryResponse
from src.schemas.profile import (
    HighlightResponse,
    MediaUpdatedResponse,
    MessageResponse,
    ProfileCreatedResponse,
    ProfileLookupResponse,
    ProfileUpdate,
    ProfileView,
    UserResponse,
)
from src.schemas.section import (
    SectionCreate,
    SectionItemResponse,
    SectionResponse,
    SectionUpdate,
    SectionWithItemsResponse,
)

__all__ = [
    "LoginRequest",
    "TokenResponse",
    "ForgotPasswordRequest",
    "ProfileUpdate",
    "ProfileView",
    "UserResponse",
    "HighlightResponse",
    "ProfileCreatedResponse",
    "ProfileLookupResponse",
    "MediaUpdatedResponse",
    "MessageResponse",
    "SectionCreate",
    "SectionUpdate",
    "SectionResponse",
    "SectionItemResponse",
    "SectionWithItemsResponse",
    "ContentItemResponse",
    "ContentListResponse",
    "ContentCreatedResponse",
    "MemoryResponse",
    "MemoryListResponse",
    "MemoryCreatedResponse",
]
