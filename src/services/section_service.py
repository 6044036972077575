"""Section and section item catalog."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.section import Section, SectionItem
from src.services.attachments import (
    Attachment,
    AttachmentManager,
    PendingUpload,
    decode_attachments,
    encode_attachments,
)
from src.services.media import CONTENT_FOLDER

logger = logging.getLogger(__name__)


class SectionService:
    """Service for user-defined sections and their items."""

    def __init__(self, db: Session, attachments: AttachmentManager):
        self.db = db
        self.attachments = attachments

    def create_section(self, user_id: int, name: str, icon: str | None) -> Section:
        """Create a section; its display order is left at the store default."""
        section = Section(user_id=user_id, name=name, icon=icon)
        self.db.add(section)
        self.db.commit()
        self.db.refresh(section)
        return section

    def list_sections(self, user_id: int) -> list[Section]:
        """Get a user's sections in display order."""
        return (
            self.db.query(Section)
            .filter(Section.user_id == user_id)
            .order_by(Section.section_order, Section.id)
            .all()
        )

    def get_section(self, section_id: int) -> Section:
        """Get a section by id or raise 404."""
        section = self.db.query(Section).filter(Section.id == section_id).first()
        if not section:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Section not found")
        return section

    def update_section(
        self,
        section_id: int,
        user_id: int,
        name: str | None,
        icon: str | None,
    ) -> Section:
        """Rename or re-icon a section owned by ``user_id``.

        A section owned by someone else is reported as missing.
        """
        section = (
            self.db.query(Section)
            .filter(Section.id == section_id, Section.user_id == user_id)
            .first()
        )
        if not section:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Section not found")

        if name is not None:
            section.name = name
        if icon is not None:
            section.icon = icon

        self.db.commit()
        self.db.refresh(section)
        return section

    async def delete_section(self, section_id: int) -> None:
        """Delete a section together with its items and their attachments."""
        section = self.get_section(section_id)
        items = self.list_items(section.id)

        for item in items:
            await self.attachments.discard_field(item.file_path, item.file_type)

        # Items go through the relationship cascade; SQLite ignores ON DELETE CASCADE
        self.db.delete(section)
        self.db.commit()
        logger.info(f"Deleted section {section_id} with {len(items)} item(s)")

    def list_items(self, section_id: int) -> list[SectionItem]:
        """Get a section's items in insertion order."""
        return (
            self.db.query(SectionItem)
            .filter(SectionItem.section_id == section_id)
            .order_by(SectionItem.id)
            .all()
        )

    def get_item(self, item_id: int) -> SectionItem:
        """Get a section item by id or raise 404."""
        item = self.db.query(SectionItem).filter(SectionItem.id == item_id).first()
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
        return item

    async def add_item(
        self,
        section_id: int,
        title: str | None,
        icon: str | None,
        description: str | None,
        uploads: list[PendingUpload],
    ) -> SectionItem:
        """Add an item to an existing section, storing its uploads first."""
        self.get_section(section_id)

        stored = await self.attachments.store_all(uploads, CONTENT_FOLDER)
        file_path, file_type = encode_attachments(stored)

        item = SectionItem(
            section_id=section_id,
            title=title,
            icon=icon,
            description=description,
            file_path=file_path,
            file_type=file_type,
        )
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    async def update_item(
        self,
        item_id: int,
        title: str | None,
        icon: str | None,
        description: str | None,
        existing_files: list[Attachment] | None,
        uploads: list[PendingUpload],
    ) -> SectionItem:
        """Update an item's fields and attachments.

        The persisted attachment list becomes ``existing_files`` (empty when not
        sent) followed by the new uploads. When both are empty the attachments
        are left untouched. Files dropped from the list stay on the media host
        unless ``reconcile_removed_attachments`` is enabled, in which case they
        are deleted after the row is saved.
        """
        item = self.get_item(item_id)

        if title is not None:
            item.title = title
        if icon is not None:
            item.icon = icon
        if description is not None:
            item.description = description

        kept = existing_files or []
        previous = []
        if kept or uploads:
            previous = decode_attachments(item.file_path, item.file_type)
            stored = await self.attachments.store_all(uploads, CONTENT_FOLDER)
            item.file_path, item.file_type = encode_attachments(kept + stored)

        self.db.commit()
        self.db.refresh(item)

        if previous and get_settings().reconcile_removed_attachments:
            current = decode_attachments(item.file_path, item.file_type)
            await self.attachments.discard_removed(previous, current)
        return item

    async def delete_item(self, item_id: int) -> None:
        """Delete an item after removing its attachments from the media host."""
        item = self.get_item(item_id)
        await self.attachments.discard_field(item.file_path, item.file_type)
        self.db.delete(item)
        self.db.commit()
