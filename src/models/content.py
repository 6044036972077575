"""Content item model."""

from sqlalchemy import Column, Enum, ForeignKey, Index, Integer, String, Text

from src.database import Base
from src.models.enums import ContentCategory
from src.models.mixins import AttachmentMixin, TimestampMixin


class ContentItem(Base, TimestampMixin, AttachmentMixin):
    """Hobby, project, skill, certificate, achievement or adventure entry."""

    __tablename__ = "content_items"
    __table_args__ = (Index("ix_content_items_user_category", "user_id", "category"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category = Column(
        Enum(ContentCategory, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    title = Column(String(255), nullable=True)
    icon = Column(String(100), nullable=True)
    color = Column(String(50), nullable=True)  # skills only
    description = Column(Text, nullable=True)
