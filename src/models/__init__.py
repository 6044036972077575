"""SQLAlchemy models."""

from src.models.content import ContentItem
from src.models.highlight import Highlight
from src.models.memory import Memory
from src.models.section import Section, SectionItem
from src.models.user import User

__all__ = [
    "User",
    "Highlight",
    "Section",
    "SectionItem",
    "Memory",
    "ContentItem",
]
