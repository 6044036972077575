"""Memory wall service."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from src.models.enums import FileKind
from src.models.memory import Memory
from src.services.attachments import AttachmentManager, PendingUpload
from src.services.media import MEMORY_FOLDER


class MemoryService:
    """Service for photo and video memories."""

    def __init__(self, db: Session, attachments: AttachmentManager):
        self.db = db
        self.attachments = attachments

    def list_memories(self, user_id: int) -> list[Memory]:
        """Get a user's memories, newest first."""
        return (
            self.db.query(Memory)
            .filter(Memory.user_id == user_id)
            .order_by(Memory.created_at.desc(), Memory.id.desc())
            .all()
        )

    async def add_memory(self, user_id: int, upload: PendingUpload, caption: str | None) -> Memory:
        """Store a photo or video and record it."""
        if upload.kind not in (FileKind.IMAGE, FileKind.VIDEO):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Only images and videos can be added as memories",
            )

        attachment = await self.attachments.store(upload, MEMORY_FOLDER)
        memory = Memory(
            user_id=user_id,
            file_path=attachment.path,
            file_type=attachment.type,
            original_name=upload.filename,
            caption=caption or "",
        )
        self.db.add(memory)
        self.db.commit()
        self.db.refresh(memory)
        return memory

    async def delete_memory(self, memory_id: int, user_id: int) -> None:
        """Delete a memory owned by ``user_id`` and, best-effort, its file."""
        memory = (
            self.db.query(Memory).filter(Memory.id == memory_id, Memory.user_id == user_id).first()
        )
        if not memory:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Memory not found")

        await self.attachments.discard(memory.file_path)
        self.db.delete(memory)
        self.db.commit()
