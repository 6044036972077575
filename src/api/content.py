"""Fixed-category content API endpoints (hobbies, projects, skills, ...)."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from src.api.dependencies import get_content_service, require_user_id
from src.api.uploads import read_upload
from src.database import get_db
from src.models.enums import ContentCategory
from src.schemas.content import ContentCreatedResponse, ContentItemResponse, ContentListResponse
from src.schemas.profile import MessageResponse
from src.services.content_service import ContentService

router = APIRouter(prefix="/api/content", tags=["content"])


def _title_for(category: ContentCategory, title: str | None, name: str | None) -> str | None:
    # Skills were historically submitted with a `name` field
    if category == ContentCategory.SKILLS:
        return title or name
    return title


@router.get("/{category}", response_model=ContentListResponse)
def list_content(
    category: ContentCategory,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ContentService, Depends(get_content_service)],
    profile_id: Annotated[str | None, Query(alias="profileId")] = None,
):
    """List a profile's items of one category."""
    user_id = require_user_id(db, profile_id)
    items = service.list_items(user_id, category)
    return ContentListResponse(items=[ContentItemResponse.model_validate(i) for i in items])


@router.post("/{category}", response_model=ContentCreatedResponse)
async def create_content(
    category: ContentCategory,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ContentService, Depends(get_content_service)],
    profile_id: Annotated[str | None, Form(alias="profileId")] = None,
    title: Annotated[str | None, Form()] = None,
    name: Annotated[str | None, Form()] = None,
    icon: Annotated[str | None, Form()] = None,
    color: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    file: Annotated[UploadFile | None, File()] = None,
):
    """Add an item, with an optional attached file."""
    user_id = require_user_id(db, profile_id)
    item = await service.create_item(
        user_id,
        category,
        title=_title_for(category, title, name),
        icon=icon,
        color=color,
        description=description,
        upload=await read_upload(file),
    )
    return ContentCreatedResponse(message=f"{category.label} added successfully", id=item.id)


@router.put("/{category}/{item_id}", response_model=MessageResponse)
async def update_content(
    category: ContentCategory,
    item_id: int,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ContentService, Depends(get_content_service)],
    profile_id: Annotated[str | None, Form(alias="profileId")] = None,
    title: Annotated[str | None, Form()] = None,
    name: Annotated[str | None, Form()] = None,
    icon: Annotated[str | None, Form()] = None,
    color: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    file: Annotated[UploadFile | None, File()] = None,
):
    """Update an item. A new file replaces the stored one."""
    user_id = require_user_id(db, profile_id)
    await service.update_item(
        item_id,
        user_id,
        category,
        title=_title_for(category, title, name),
        icon=icon,
        color=color,
        description=description,
        upload=await read_upload(file),
    )
    return MessageResponse(message=f"{category.label} updated successfully")


@router.delete("/{category}/{item_id}", response_model=MessageResponse)
async def delete_content(
    category: ContentCategory,
    item_id: int,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ContentService, Depends(get_content_service)],
    profile_id: Annotated[str | None, Query(alias="profileId")] = None,
):
    """Delete an item and its file."""
    user_id = require_user_id(db, profile_id)
    await service.delete_item(item_id, user_id, category)
    return MessageResponse(message=f"{category.label} deleted successfully")
