"""Memory model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text

from src.database import Base
from src.models.mixins import AttachmentMixin, TimestampMixin


class Memory(Base, TimestampMixin, AttachmentMixin):
    """Photo or video posted to a profile's memory wall."""

    __tablename__ = "memories"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    original_name = Column(String(255), nullable=True)
    caption = Column(Text, nullable=False, default="")
