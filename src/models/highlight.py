"""Highlight model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Highlight(Base, TimestampMixin):
    """Short free-text label shown on a profile."""

    __tablename__ = "highlights"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    highlight_text = Column(String(500), nullable=False)

    user = relationship("User", back_populates="highlights")
