"""Content service for the fixed profile categories (hobbies, projects, ...)."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from src.models.content import ContentItem
from src.models.enums import DEFAULT_SKILL_COLOR, ContentCategory
from src.services.attachments import AttachmentManager, PendingUpload
from src.services.media import CONTENT_FOLDER

logger = logging.getLogger(__name__)


class ContentService:
    """Service for single-attachment content items."""

    def __init__(self, db: Session, attachments: AttachmentManager):
        self.db = db
        self.attachments = attachments

    def list_items(self, user_id: int, category: ContentCategory) -> list[ContentItem]:
        """Get a user's items of one category in insertion order."""
        return (
            self.db.query(ContentItem)
            .filter(ContentItem.user_id == user_id, ContentItem.category == category)
            .order_by(ContentItem.id)
            .all()
        )

    def get_item(self, item_id: int, user_id: int, category: ContentCategory) -> ContentItem:
        """Get an item owned by ``user_id`` or raise 404."""
        item = (
            self.db.query(ContentItem)
            .filter(
                ContentItem.id == item_id,
                ContentItem.user_id == user_id,
                ContentItem.category == category,
            )
            .first()
        )
        if not item:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{category.label} not found",
            )
        return item

    async def create_item(
        self,
        user_id: int,
        category: ContentCategory,
        title: str | None,
        icon: str | None = None,
        color: str | None = None,
        description: str | None = None,
        upload: PendingUpload | None = None,
    ) -> ContentItem:
        """Create an item, storing its file first when one is given."""
        file_path = None
        file_type = None
        if upload is not None:
            attachment = await self.attachments.store(upload, CONTENT_FOLDER)
            file_path, file_type = attachment.path, attachment.type

        if category == ContentCategory.SKILLS:
            color = color or DEFAULT_SKILL_COLOR

        item = ContentItem(
            user_id=user_id,
            category=category,
            title=title,
            icon=icon or category.default_icon,
            color=color,
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
        user_id: int,
        category: ContentCategory,
        title: str | None = None,
        icon: str | None = None,
        color: str | None = None,
        description: str | None = None,
        upload: PendingUpload | None = None,
    ) -> ContentItem:
        """Update an item. A new file replaces the old one on the media host.

        Without a new file the attachment columns are left as they are.
        """
        item = self.get_item(item_id, user_id, category)

        if title is not None:
            item.title = title
        if icon is not None:
            item.icon = icon
        if color is not None:
            item.color = color
        if description is not None:
            item.description = description

        if upload is not None:
            attachment = await self.attachments.store(upload, CONTENT_FOLDER)
            await self.attachments.discard(item.file_path)
            item.file_path, item.file_type = attachment.path, attachment.type

        self.db.commit()
        self.db.refresh(item)
        return item

    async def delete_item(self, item_id: int, user_id: int, category: ContentCategory) -> None:
        """Delete an item and, best-effort, its file."""
        item = self.get_item(item_id, user_id, category)
        await self.attachments.discard(item.file_path)
        self.db.delete(item)
        self.db.commit()
        logger.info(f"Deleted {category.value} item {item_id} of user {user_id}")
