"""Enums for model fields."""

from enum import Enum


class FileKind(str, Enum):
    """Kind of media stored in an attachment field."""

    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"
    APK = "apk"
    MULTIPLE = "multiple"


class ContentCategory(str, Enum):
    """Fixed profile content categories, addressed by their URL segment."""

    HOBBIES = "hobbies"
    PROJECTS = "projects"
    SKILLS = "skills"
    CERTIFICATES = "certificates"
    ACHIEVEMENTS = "achievements"
    ADVENTURES = "adventures"

    @property
    def label(self) -> str:
        """Singular display name used in response messages."""
        return _CATEGORY_LABELS[self]

    @property
    def default_icon(self) -> str | None:
        """Icon used when the client does not send one."""
        return _CATEGORY_ICONS.get(self)


_CATEGORY_LABELS = {
    ContentCategory.HOBBIES: "Hobby",
    ContentCategory.PROJECTS: "Project",
    ContentCategory.SKILLS: "Skill",
    ContentCategory.CERTIFICATES: "Certificate",
    ContentCategory.ACHIEVEMENTS: "Achievement",
    ContentCategory.ADVENTURES: "Adventure",
}

_CATEGORY_ICONS = {
    ContentCategory.HOBBIES: "fa-solid fa-heart",
    ContentCategory.SKILLS: "fa-solid fa-star",
    ContentCategory.CERTIFICATES: "fa-solid fa-certificate",
    ContentCategory.ACHIEVEMENTS: "fa-solid fa-trophy",
    ContentCategory.ADVENTURES: "fa-solid fa-hiking",
}

DEFAULT_SKILL_COLOR = "cyan-custom"
