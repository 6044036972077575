"""User model."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Profile owner; every other row is scoped to one user."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(String(12), unique=True, nullable=False, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    intro_text = Column(Text, nullable=False)
    profile_picture = Column(String(1000), nullable=True)
    cover_image = Column(String(1000), nullable=True)
    password_hash = Column(String(255), nullable=True)
    security_code_hash = Column(String(255), nullable=True)

    # Relationships
    highlights = relationship(
        "Highlight",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Highlight.id",
    )
    sections = relationship(
        "Section",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="[Section.section_order, Section.id]",
    )
