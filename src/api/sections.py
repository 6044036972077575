"""Section and section item API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_section_service, require_user_id
from src.api.uploads import read_uploads
from src.database import get_db
from src.schemas.profile import MessageResponse
from src.schemas.section import (
    SectionCreate,
    SectionCreateResponse,
    SectionItemListResponse,
    SectionItemResponse,
    SectionListResponse,
    SectionResponse,
    SectionUpdate,
)
from src.services.attachments import parse_attachment_list
from src.services.section_service import SectionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sections", tags=["sections"])


def _owner_id(db: Session, profile_id: str | None, user_id: int | None) -> int:
    """Sections accept either an external profile id or a raw user id."""
    if profile_id or user_id is None:
        return require_user_id(db, profile_id)
    return user_id


@router.post("/section", response_model=SectionCreateResponse)
def create_section(
    section_data: SectionCreate,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[SectionService, Depends(get_section_service)],
):
    """Create a new section."""
    user_id = _owner_id(db, section_data.profile_id, section_data.user_id)
    section = service.create_section(user_id, section_data.name, section_data.icon)
    return SectionCreateResponse(id=section.id, name=section.name, icon=section.icon)


@router.get("/sections", response_model=SectionListResponse)
@router.get("/section", response_model=SectionListResponse, include_in_schema=False)
def list_sections(
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[SectionService, Depends(get_section_service)],
    profile_id: Annotated[str | None, Query(alias="profileId")] = None,
    user_id: Annotated[int | None, Query(alias="userId")] = None,
):
    """Get all sections of a profile in display order."""
    owner_id = _owner_id(db, profile_id, user_id)
    sections = service.list_sections(owner_id)
    return SectionListResponse(sections=[SectionResponse.model_validate(s) for s in sections])


@router.put("/section/{section_id}", response_model=MessageResponse)
def update_section(
    section_id: int,
    section_data: SectionUpdate,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[SectionService, Depends(get_section_service)],
):
    """Rename or re-icon a section owned by the profile."""
    user_id = require_user_id(db, section_data.profile_id)
    service.update_section(section_id, user_id, section_data.name, section_data.icon)
    return MessageResponse(message="Section updated successfully")


@router.delete("/section/{section_id}", response_model=MessageResponse)
async def delete_section(
    section_id: int,
    service: Annotated[SectionService, Depends(get_section_service)],
):
    """Delete a section with all of its items."""
    await service.delete_section(section_id)
    return MessageResponse(message="Section deleted")


@router.post("/section/item", response_model=SectionItemResponse)
async def add_section_item(
    section_id: Annotated[int, Form(alias="sectionId")],
    service: Annotated[SectionService, Depends(get_section_service)],
    title: Annotated[str | None, Form()] = None,
    icon: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    files: Annotated[list[UploadFile] | None, File()] = None,
):
    """Add an item with up to the configured number of files."""
    uploads = await read_uploads(files)
    item = await service.add_item(section_id, title, icon, description, uploads)
    return SectionItemResponse.model_validate(item)


@router.get("/section/items", response_model=SectionItemListResponse)
def list_section_items(
    section_id: Annotated[int, Query(alias="sectionId")],
    service: Annotated[SectionService, Depends(get_section_service)],
):
    """Get the items of a section."""
    items = service.list_items(section_id)
    return SectionItemListResponse(items=[SectionItemResponse.model_validate(i) for i in items])


@router.put("/section/item/{item_id}", response_model=MessageResponse)
async def update_section_item(
    item_id: int,
    service: Annotated[SectionService, Depends(get_section_service)],
    title: Annotated[str | None, Form()] = None,
    icon: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    existing_files: Annotated[str | None, Form(alias="existingFiles")] = None,
    files: Annotated[list[UploadFile] | None, File()] = None,
):
    """Update an item. ``existingFiles`` lists the attachments to keep, in order."""
    kept = None
    if existing_files is not None:
        try:
            kept = parse_attachment_list(existing_files)
        except ValueError as e:
            logger.warning(f"Rejected existingFiles for item {item_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="existingFiles must be a JSON array of {path, type} objects",
            ) from e

    uploads = await read_uploads(files)
    await service.update_item(item_id, title, icon, description, kept, uploads)
    return MessageResponse(message="Item updated successfully")


@router.delete("/section/item/{item_id}", response_model=MessageResponse)
async def delete_section_item(
    item_id: int,
    service: Annotated[SectionService, Depends(get_section_service)],
):
    """Delete an item and its attachments."""
    await service.delete_item(item_id)
    return MessageResponse(message="Item deleted")
