"""Validation of multipart uploads before they reach the media host."""

from pathlib import PurePath

from fastapi import HTTPException, UploadFile, status

from src.config import get_settings
from src.services.attachments import PendingUpload

ALLOWED_EXTENSIONS = {
    "jpg",
    "jpeg",
    "png",
    "gif",
    "webp",
    "mp4",
    "mov",
    "avi",
    "pdf",
    "doc",
    "docx",
    "txt",
    "apk",
}


async def read_upload(upload: UploadFile | None) -> PendingUpload | None:
    """Read and validate one upload. An empty file field counts as no upload.

    Note: This must be async because UploadFile.read() is async.
    """
    if upload is None or not upload.filename:
        return None

    extension = PurePath(upload.filename).suffix.lower().lstrip(".")
    if extension not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only images, videos, APK files, and documents are allowed!",
        )

    settings = get_settings()
    data = await upload.read()
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                "File too large! Maximum file size is "
                f"{settings.max_upload_bytes // (1024 * 1024)}MB."
            ),
        )

    return PendingUpload(data=data, filename=upload.filename, content_type=upload.content_type)


async def read_uploads(uploads: list[UploadFile] | None) -> list[PendingUpload]:
    """Read and validate a multi-file field, keeping the client's order."""
    uploads = uploads or []
    max_files = get_settings().max_item_files
    if len(uploads) > max_files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Too many files! At most {max_files} files can be uploaded at once.",
        )

    pending = []
    for upload in uploads:
        item = await read_upload(upload)
        if item is not None:
            pending.append(item)
    return pending
