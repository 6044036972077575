"""Memory wall API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_memory_service, require_user_id
from src.api.uploads import read_upload
from src.database import get_db
from src.schemas.memory import MemoryCreatedResponse, MemoryListResponse, MemoryResponse
from src.schemas.profile import MessageResponse
from src.services.memory_service import MemoryService

router = APIRouter(prefix="/api/memories", tags=["memories"])


@router.get("", response_model=MemoryListResponse)
def list_memories(
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[MemoryService, Depends(get_memory_service)],
    profile_id: Annotated[str | None, Query(alias="profileId")] = None,
):
    """Get all memories for a profile, newest first."""
    user_id = require_user_id(db, profile_id)
    memories = service.list_memories(user_id)
    return MemoryListResponse(memories=[MemoryResponse.model_validate(m) for m in memories])


@router.post("", response_model=MemoryCreatedResponse)
async def upload_memory(
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[MemoryService, Depends(get_memory_service)],
    profile_id: Annotated[str | None, Form(alias="profileId")] = None,
    caption: Annotated[str | None, Form()] = None,
    memory: Annotated[UploadFile | None, File()] = None,
):
    """Upload a photo or video memory."""
    user_id = require_user_id(db, profile_id)
    upload = await read_upload(memory)
    if upload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    created = await service.add_memory(user_id, upload, caption)
    return MemoryCreatedResponse(
        message="Memory uploaded successfully",
        id=created.id,
        file_path=created.file_path,
        file_type=created.file_type,
    )


@router.delete("/{memory_id}", response_model=MessageResponse)
async def delete_memory(
    memory_id: int,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[MemoryService, Depends(get_memory_service)],
    profile_id: Annotated[str | None, Query(alias="profileId")] = None,
):
    """Delete a memory owned by the profile."""
    user_id = require_user_id(db, profile_id)
    await service.delete_memory(memory_id, user_id)
    return MessageResponse(message="Memory deleted successfully")
