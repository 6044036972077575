"""Resolve an external profile id to the internal user id it scopes."""

import logging

from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.user import User

logger = logging.getLogger(__name__)


def lookup_user_id(db: Session, profile_id: str | None) -> int | None:
    """Get the user id owning ``profile_id``, or None."""
    if not profile_id:
        return None
    row = db.query(User.id).filter(User.profile_id == profile_id).first()
    return row[0] if row else None


def resolve_user_id(db: Session, profile_id: str | None) -> int | None:
    """Resolve a profile id to a user id.

    When the profile id is missing or unknown and legacy default-tenant mode is
    enabled, the configured default user id is returned instead of an error.
    Returns None only when legacy mode is disabled.
    """
    user_id = lookup_user_id(db, profile_id)
    if user_id is not None:
        return user_id

    settings = get_settings()
    if not settings.legacy_default_tenant:
        return None

    if profile_id:
        logger.warning(
            f"Unknown profile id {profile_id!r}, using default user {settings.legacy_default_user_id}"
        )
    return settings.legacy_default_user_id
