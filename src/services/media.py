"""Media host client for Cloudinary uploads and deletes."""

import hashlib
import logging
import time
from dataclasses import dataclass

import httpx

from src.config import get_settings
from src.models.enums import FileKind

logger = logging.getLogger(__name__)

PROFILE_FOLDER = "profile-images"
COVER_FOLDER = "cover-images"
CONTENT_FOLDER = "content-files"
MEMORY_FOLDER = "memory-files"

APK_CONTENT_TYPE = "application/vnd.android.package-archive"

_RESOURCE_TYPES = ("image", "video", "raw")

# Incoming transformation and format allow-list applied by the host on upload
UPLOAD_TRANSFORMATION = "c_limit,h_1000,w_1000/q_auto:good"
ALLOWED_FORMATS = "jpg,jpeg,png,gif,webp,mp4,mov,avi,pdf,doc,docx,txt,apk"


class MediaStoreError(Exception):
    """Raised when the media host rejects or fails a request."""


@dataclass
class StoredMedia:
    """Result of a successful upload."""

    url: str
    public_id: str


def detect_file_kind(content_type: str | None) -> FileKind:
    """Map an upload's MIME type onto the attachment kind stored with it."""
    content_type = (content_type or "").lower()
    if content_type.startswith("image/"):
        return FileKind.IMAGE
    if content_type.startswith("video/"):
        return FileKind.VIDEO
    if content_type == APK_CONTENT_TYPE:
        return FileKind.APK
    return FileKind.DOCUMENT


def public_id_from_url(url: str | None) -> str | None:
    """Rebuild the media host identifier from a delivery URL.

    ``https://res.cloudinary.com/demo/image/upload/v17/content-files/abc123.png``
    becomes ``content-files/abc123``.
    """
    if not url:
        return None
    parts = url.split("/")
    if len(parts) < 2:
        return None
    name = parts[-1].split(".")[0]
    folder = parts[-2]
    return f"{folder}/{name}"


def resource_type_from_url(url: str | None) -> str:
    """Return the ``image``/``video``/``raw`` segment preceding ``upload``."""
    if not url:
        return "image"
    parts = url.split("/")
    for segment, following in zip(parts, parts[1:]):
        if following == "upload" and segment in _RESOURCE_TYPES:
            return segment
    return "image"


class CloudinaryMediaStore:
    """Signed client for the Cloudinary upload API."""

    API_BASE_URL = "https://api.cloudinary.com/v1_1"

    def __init__(self) -> None:
        self.settings = get_settings()
        self.cloud_name = self.settings.cloudinary_cloud_name
        self.api_key = self.settings.cloudinary_api_key
        self.api_secret = self.settings.cloudinary_api_secret
        self.timeout = self.settings.media_timeout_seconds

    @property
    def is_configured(self) -> bool:
        """Check if Cloudinary credentials are present."""
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _sign(self, params: dict[str, str]) -> str:
        """Sign request parameters (sorted ``k=v`` pairs joined by ``&`` plus the secret)."""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode()).hexdigest()  # noqa: S324

    def _signed_params(self, **params: str) -> dict[str, str]:
        params["timestamp"] = str(int(time.time()))
        signature = self._sign(params)
        return {**params, "api_key": self.api_key, "signature": signature}

    async def store(
        self,
        data: bytes,
        filename: str,
        content_type: str | None,
        folder: str,
    ) -> StoredMedia:
        """Upload a file into ``folder`` and return its URL and identifier."""
        if not self.is_configured:
            raise MediaStoreError("Media host credentials are not configured")

        url = f"{self.API_BASE_URL}/{self.cloud_name}/auto/upload"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    url,
                    data=self._signed_params(
                        folder=folder,
                        transformation=UPLOAD_TRANSFORMATION,
                        allowed_formats=ALLOWED_FORMATS,
                    ),
                    files={"file": (filename, data, content_type or "application/octet-stream")},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Upload of '{filename}' to {folder} failed: {e}")
            raise MediaStoreError(f"Upload failed: {e}") from e

        try:
            stored = StoredMedia(url=payload["secure_url"], public_id=payload["public_id"])
        except KeyError as e:
            raise MediaStoreError(f"Unexpected upload response: missing {e}") from e

        logger.info(f"Stored '{filename}' as {stored.public_id}")
        return stored

    async def delete(self, public_id: str, resource_type: str = "image") -> None:
        """Destroy an uploaded asset by identifier."""
        if not self.is_configured:
            raise MediaStoreError("Media host credentials are not configured")

        url = f"{self.API_BASE_URL}/{self.cloud_name}/{resource_type}/destroy"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, data=self._signed_params(public_id=public_id))
                response.raise_for_status()
                result = response.json().get("result")
        except httpx.HTTPError as e:
            raise MediaStoreError(f"Delete of {public_id} failed: {e}") from e

        if result not in ("ok", "not found"):
            raise MediaStoreError(f"Delete of {public_id} returned {result!r}")
        logger.info(f"Deleted {public_id} ({result})")


def get_media_store() -> CloudinaryMediaStore:
    """Get a media store instance."""
    return CloudinaryMediaStore()
