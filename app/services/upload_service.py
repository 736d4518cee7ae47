"""Batch media uploads recorded in the database."""

import base64
import binascii
import logging
import re
import uuid
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ValidationFailed
from app.models.upload import Upload
from app.services.media_service import CompensatingActions, MediaService

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)


@dataclass(frozen=True)
class IncomingFile:
    filename: str
    mime_type: str
    data: bytes


def decode_data_url(data_url: str, filename: str | None = None) -> IncomingFile:
    """Decode a ``data:<mime>;base64,<payload>`` string."""
    match = DATA_URL_PATTERN.match(data_url.strip())
    if match is None:
        raise ValidationFailed("Invalid base64 file. Expected a data URL.")
    try:
        data = base64.b64decode(match["data"], validate=True)
    except (binascii.Error, ValueError):
        raise ValidationFailed("Invalid base64 file content")
    return IncomingFile(filename=filename or "file", mime_type=match["mime"], data=data)


def validate_files(files: list[IncomingFile]) -> None:
    if not files:
        raise ValidationFailed("No files uploaded")
    if len(files) > settings.upload_max_files:
        raise ValidationFailed(f"Too many files. Maximum is {settings.upload_max_files}.")
    for file in files:
        if file.mime_type not in settings.upload_allowed_types:
            raise ValidationFailed("Invalid file type. Only images and videos are allowed.")
        if len(file.data) > settings.upload_max_bytes:
            raise ValidationFailed(
                f"File {file.filename} is too large. Maximum size is "
                f"{settings.upload_max_bytes // (1024 * 1024)}MB."
            )


class UploadService:
    def __init__(self, db: AsyncSession, media: MediaService) -> None:
        self.db = db
        self.media = media

    async def upload(self, files: list[IncomingFile], uploaded_by: uuid.UUID | None) -> Upload:
        """Upload a validated batch and record it.

        If the record cannot be stored, the uploaded files are deleted again.
        """
        validate_files(files)
        assets = await self.media.upload_many((f.data, f.mime_type, f.filename) for f in files)

        record = Upload(files=[asset.to_dict() for asset in assets], uploaded_by=uploaded_by)
        self.db.add(record)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            cleanup = CompensatingActions()
            cleanup.delete_media(self.media, (asset.public_id for asset in assets))
            await cleanup.run()
            raise
        await self.db.refresh(record)

        logger.info("Upload stored: id=%s files=%d", record.id, len(assets))
        return record
