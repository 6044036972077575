"""FastAPI dependencies for authentication, tenancy and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.services.attachments import AttachmentManager, MediaStore
from src.services.auth import decode_access_token
from src.services.content_service import ContentService
from src.services.media import get_media_store
from src.services.memory_service import MemoryService
from src.services.profile_service import ProfileService
from src.services.section_service import SectionService
from src.services.tenant import resolve_user_id

security = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> int:
    """Get the authenticated user id from the bearer token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    user_id = payload.get("sub") if payload else None
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return int(user_id)


def require_user_id(db: Session, profile_id: str | None) -> int:
    """Resolve the tenant for a request, 404 when it cannot be resolved."""
    user_id = resolve_user_id(db, profile_id)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return user_id


def get_attachment_manager(
    media_store: Annotated[MediaStore, Depends(get_media_store)],
) -> AttachmentManager:
    """Get attachment manager bound to the media store."""
    return AttachmentManager(media_store)


def get_profile_service(
    db: Annotated[Session, Depends(get_db)],
    attachments: Annotated[AttachmentManager, Depends(get_attachment_manager)],
) -> ProfileService:
    """Get profile service with dependencies."""
    return ProfileService(db, attachments)


def get_section_service(
    db: Annotated[Session, Depends(get_db)],
    attachments: Annotated[AttachmentManager, Depends(get_attachment_manager)],
) -> SectionService:
    """Get section service with dependencies."""
    return SectionService(db, attachments)


def get_content_service(
    db: Annotated[Session, Depends(get_db)],
    attachments: Annotated[AttachmentManager, Depends(get_attachment_manager)],
) -> ContentService:
    """Get content service with dependencies."""
    return ContentService(db, attachments)


def get_memory_service(
    db: Annotated[Session, Depends(get_db)],
    attachments: Annotated[AttachmentManager, Depends(get_attachment_manager)],
) -> MemoryService:
    """Get memory service with dependencies."""
    return MemoryService(db, attachments)
