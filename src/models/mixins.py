"""Mixins for SQLAlchemy models."""

from sqlalchemy import Column, DateTime, String, Text, func


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class AttachmentMixin:
    """Mixin for rows carrying a media host attachment.

    ``file_path`` holds a media URL, or a JSON array of ``{"path", "type"}``
    records when ``file_type`` is ``multiple``.
    """

    file_path = Column(Text, nullable=True)
    file_type = Column(String(20), nullable=True)
