"""Section and SectionItem models."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import AttachmentMixin, TimestampMixin


class Section(Base, TimestampMixin):
    """User-defined profile section holding ordered items."""

    __tablename__ = "sections"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    icon = Column(String(100), nullable=True)
    section_order = Column(Integer, nullable=False, default=0, server_default="0")

    # Relationships
    user = relationship("User", back_populates="sections")
    items = relationship(
        "SectionItem",
        back_populates="section",
        cascade="all, delete-orphan",
        order_by="SectionItem.id",
    )


class SectionItem(Base, TimestampMixin, AttachmentMixin):
    """Entry within a section; may carry several attachments."""

    __tablename__ = "section_items"

    id = Column(Integer, primary_key=True, index=True)
    section_id = Column(
        Integer, ForeignKey("sections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=True)
    icon = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)

    section = relationship("Section", back_populates="items")
