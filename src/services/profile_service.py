"""Profile service: creation, updates, profile images and the composed profile view."""

import logging
import uuid

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from src.models.highlight import Highlight
from src.models.section import Section, SectionItem
from src.models.user import User
from src.schemas.profile import (
    HighlightResponse,
    ProfileView,
    UserResponse,
    is_valid_username,
)
from src.schemas.section import SectionItemResponse, SectionResponse, SectionWithItemsResponse
from src.services.attachments import AttachmentManager, PendingUpload
from src.services.auth import get_password_hash
from src.services.media import COVER_FOLDER, PROFILE_FOLDER

logger = logging.getLogger(__name__)

PROFILE_ID_LENGTH = 12
MIN_PASSWORD_LENGTH = 6
MIN_SECURITY_CODE_LENGTH = 2

# Pictures seeded before the media host was used point at bundled files
LEGACY_PICTURE_PREFIX = "user."


def split_highlights(raw: str) -> list[str]:
    """Split a comma-separated highlight string, dropping blanks."""
    return [part.strip() for part in raw.split(",") if part.strip()]


class ProfileService:
    """Service for profile-related operations."""

    def __init__(self, db: Session, attachments: AttachmentManager | None = None):
        self.db = db
        self.attachments = attachments

    def get_user(self, user_id: int) -> User | None:
        """Get a user by internal id."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_profile_id(self, profile_id: str) -> User | None:
        """Get a user by external profile id."""
        return self.db.query(User).filter(User.profile_id == profile_id).first()

    def get_by_username(self, username: str) -> User | None:
        """Get a user by username."""
        return self.db.query(User).filter(User.username == username).first()

    def validate_username(self, username: str, exclude_user_id: int | None = None) -> None:
        """Raise 400 unless ``username`` is well-formed and not taken by another user."""
        if not is_valid_username(username):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username can only contain letters, numbers, and underscores",
            )

        query = self.db.query(User.id).filter(User.username == username)
        if exclude_user_id is not None:
            query = query.filter(User.id != exclude_user_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username already taken. Please choose a different one.",
            )

    def _generate_profile_id(self) -> str:
        while True:
            profile_id = uuid.uuid4().hex[:PROFILE_ID_LENGTH]
            if not self.get_by_profile_id(profile_id):
                return profile_id

    async def create_profile(
        self,
        name: str,
        username: str,
        intro_text: str,
        highlights: list[str],
        security_code: str,
        password: str | None = None,
        profile_picture: PendingUpload | None = None,
        cover_image: PendingUpload | None = None,
    ) -> User:
        """Create a user with its highlights and optional profile images.

        The username is validated before anything is uploaded or written.
        """
        self.validate_username(username)

        user = User(
            profile_id=self._generate_profile_id(),
            username=username,
            name=name,
            intro_text=intro_text,
            security_code_hash=get_password_hash(security_code.strip()),
        )
        if password and len(password) >= MIN_PASSWORD_LENGTH:
            user.password_hash = get_password_hash(password)

        if profile_picture is not None:
            user.profile_picture = (await self.attachments.store(profile_picture, PROFILE_FOLDER)).path
        if cover_image is not None:
            user.cover_image = (await self.attachments.store(cover_image, COVER_FOLDER)).path

        user.highlights = [Highlight(highlight_text=text) for text in highlights]
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Created profile {user.profile_id} for '{username}'")
        return user

    def update_profile(
        self,
        user_id: int,
        name: str | None = None,
        username: str | None = None,
        intro_text: str | None = None,
        highlights: list[str] | None = None,
    ) -> None:
        """Update non-empty profile fields; a highlights list replaces the whole set."""
        if username:
            self.validate_username(username, exclude_user_id=user_id)

        user = self.get_user(user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

        if name:
            user.name = name
        if username:
            user.username = username
        if intro_text:
            user.intro_text = intro_text

        if highlights is not None:
            self.db.query(Highlight).filter(Highlight.user_id == user_id).delete(
                synchronize_session=False
            )
            for text in highlights:
                if text.strip():
                    self.db.add(Highlight(user_id=user_id, highlight_text=text.strip()))

        self.db.commit()

    async def replace_profile_picture(self, user_id: int, upload: PendingUpload) -> str:
        """Store a new profile picture and drop the previous one."""
        user = self._require_user(user_id)
        attachment = await self.attachments.store(upload, PROFILE_FOLDER)
        if user.profile_picture and not user.profile_picture.startswith(LEGACY_PICTURE_PREFIX):
            await self.attachments.discard(user.profile_picture)
        user.profile_picture = attachment.path
        self.db.commit()
        return attachment.path

    async def replace_cover_image(self, user_id: int, upload: PendingUpload) -> str:
        """Store a new cover image and drop the previous one."""
        user = self._require_user(user_id)
        attachment = await self.attachments.store(upload, COVER_FOLDER)
        if user.cover_image:
            await self.attachments.discard(user.cover_image)
        user.cover_image = attachment.path
        self.db.commit()
        return attachment.path

    def set_password(self, user: User, new_password: str) -> None:
        """Replace a user's password hash."""
        user.password_hash = get_password_hash(new_password)
        self.db.commit()

    def build_profile_view(self, user: User) -> ProfileView:
        """Compose the user, highlights, sections and section items.

        Each part is a separate query; the result is not a consistent snapshot
        if the profile is edited concurrently.
        """
        highlights = (
            self.db.query(Highlight)
            .filter(Highlight.user_id == user.id)
            .order_by(Highlight.id)
            .all()
        )
        sections = (
            self.db.query(Section)
            .filter(Section.user_id == user.id)
            .order_by(Section.section_order, Section.id)
            .all()
        )

        section_views = []
        for section in sections:
            items = (
                self.db.query(SectionItem)
                .filter(SectionItem.section_id == section.id)
                .order_by(SectionItem.id)
                .all()
            )
            section_views.append(
                SectionWithItemsResponse(
                    **SectionResponse.model_validate(section).model_dump(),
                    items=[SectionItemResponse.model_validate(item) for item in items],
                )
            )

        return ProfileView(
            user=UserResponse.model_validate(user),
            highlights=[HighlightResponse.model_validate(h) for h in highlights],
            sections=section_views,
        )

    def _require_user(self, user_id: int) -> User:
        user = self.get_user(user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
        return user
