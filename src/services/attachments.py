"""Attachment lifecycle: keeps media host assets and attachment columns in step.

Single-attachment rows (content items, memories, profile images) store one URL
plus its kind. Section items store a JSON array of ``{"path", "type"}`` records
with ``file_type = "multiple"``; rows written before multi-file support hold a
bare URL instead, and readers accept both.

Every delete against the media host is best-effort: failures are logged and
never block the database mutation that triggered them.
"""

import json
import logging
from dataclasses import asdict, dataclass
from typing import Protocol

from src.models.enums import FileKind
from src.services.media import (
    StoredMedia,
    detect_file_kind,
    public_id_from_url,
    resource_type_from_url,
)

logger = logging.getLogger(__name__)


class MediaStore(Protocol):
    """What the lifecycle manager needs from a media host."""

    async def store(
        self, data: bytes, filename: str, content_type: str | None, folder: str
    ) -> StoredMedia: ...

    async def delete(self, public_id: str, resource_type: str = "image") -> None: ...


@dataclass
class Attachment:
    """One stored file as persisted in an attachment field."""

    path: str
    type: str


@dataclass
class PendingUpload:
    """An already validated upload waiting to be sent to the media host."""

    data: bytes
    filename: str
    content_type: str | None

    @property
    def kind(self) -> FileKind:
        return detect_file_kind(self.content_type)


def encode_attachments(attachments: list[Attachment]) -> tuple[str | None, str | None]:
    """Encode attachments into a ``(file_path, file_type)`` column pair."""
    if not attachments:
        return None, None
    return json.dumps([asdict(a) for a in attachments]), FileKind.MULTIPLE.value


# Kinds a stored attachment may carry; "file" was written by older clients
ATTACHMENT_KINDS = {
    FileKind.IMAGE.value,
    FileKind.VIDEO.value,
    FileKind.DOCUMENT.value,
    FileKind.APK.value,
}
LEGACY_FILE_KIND = "file"


def _attachment_from_entry(entry: object) -> Attachment | None:
    """Build an attachment from one JSON record, or None if it is unusable."""
    if not isinstance(entry, dict):
        return None
    path = entry.get("path")
    kind = entry.get("type") or FileKind.DOCUMENT.value
    if not isinstance(path, str) or not path or not isinstance(kind, str):
        return None
    if kind == LEGACY_FILE_KIND:
        kind = FileKind.DOCUMENT.value
    return Attachment(path=path, type=kind)


def decode_attachments(file_path: str | None, file_type: str | None) -> list[Attachment]:
    """Decode a ``(file_path, file_type)`` pair, accepting legacy single URLs.

    Malformed records inside a JSON list are skipped.
    """
    if not file_path:
        return []
    try:
        entries = json.loads(file_path)
    except ValueError:
        entries = None
    if isinstance(entries, list):
        attachments = (_attachment_from_entry(entry) for entry in entries)
        return [attachment for attachment in attachments if attachment is not None]
    return [Attachment(path=file_path, type=file_type or FileKind.DOCUMENT.value)]


def parse_attachment_list(raw: str) -> list[Attachment]:
    """Parse a client-supplied JSON list of ``{"path", "type"}`` records.

    Raises:
        ValueError: if the payload is not a list of records with a string
            ``path`` and, when present, a known ``type``.
    """
    entries = json.loads(raw)
    if not isinstance(entries, list):
        raise ValueError("expected a JSON array")
    attachments = []
    for entry in entries:
        attachment = _attachment_from_entry(entry)
        if attachment is None:
            raise ValueError("each entry needs a string 'path' and 'type'")
        if attachment.type not in ATTACHMENT_KINDS:
            raise ValueError(f"unknown attachment type {attachment.type!r}")
        attachments.append(attachment)
    return attachments


class AttachmentManager:
    """Stores new uploads and disposes of replaced or removed ones."""

    def __init__(self, media_store: MediaStore):
        self.media_store = media_store

    async def store(self, upload: PendingUpload, folder: str) -> Attachment:
        """Send an upload to the media host and describe the stored file."""
        stored = await self.media_store.store(
            upload.data, upload.filename, upload.content_type, folder
        )
        return Attachment(path=stored.url, type=upload.kind.value)

    async def store_all(self, uploads: list[PendingUpload], folder: str) -> list[Attachment]:
        """Store uploads one after another, preserving their order."""
        return [await self.store(upload, folder) for upload in uploads]

    async def discard(self, url: str | None) -> None:
        """Delete the asset behind ``url`` from the media host, best-effort."""
        public_id = public_id_from_url(url)
        if not public_id:
            return
        try:
            await self.media_store.delete(public_id, resource_type_from_url(url))
        except Exception as e:
            # Don't fail the request if the media host delete fails
            logger.error(f"Failed to delete {public_id} from media host: {e}")

    async def discard_field(self, file_path: str | None, file_type: str | None) -> None:
        """Delete every asset referenced by an attachment column pair."""
        for attachment in decode_attachments(file_path, file_type):
            await self.discard(attachment.path)

    async def discard_removed(
        self,
        previous: list[Attachment],
        kept: list[Attachment],
    ) -> None:
        """Delete assets present in ``previous`` but no longer in ``kept``."""
        kept_paths = {attachment.path for attachment in kept}
        for attachment in previous:
            if attachment.path not in kept_paths:
                await self.discard(attachment.path)
