"""Media host access and post-commit compensating actions."""

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

import sentry_sdk

from app.core.exceptions import UpstreamFailure
from app.integrations.cloudinary.client import (
    CloudinaryClient,
    CloudinaryError,
    UploadedAsset,
    extract_public_id,
)

logger = logging.getLogger(__name__)


class MediaService:
    """Uploads and deletes hosted images and videos."""

    def __init__(self, client: CloudinaryClient) -> None:
        self.client = client

    async def upload(self, data: bytes, mime_type: str, filename: str = "file") -> UploadedAsset:
        try:
            return await self.client.upload(data, mime_type, filename)
        except CloudinaryError as e:
            logger.error("Media upload failed: %s", e)
            raise UpstreamFailure("Failed to upload file to media host") from e

    async def upload_many(self, files: Iterable[tuple[bytes, str, str]]) -> list[UploadedAsset]:
        """Upload a batch of ``(data, mime_type, filename)`` files.

        If any upload fails, files already uploaded in this batch are deleted
        before the failure is raised.
        """
        uploaded: list[UploadedAsset] = []
        try:
            for data, mime_type, filename in files:
                uploaded.append(await self.upload(data, mime_type, filename))
        except UpstreamFailure:
            cleanup = CompensatingActions()
            cleanup.delete_media(self, (asset.public_id for asset in uploaded))
            await cleanup.run()
            raise
        return uploaded

    async def delete(self, url_or_public_id: str) -> str:
        """Delete an asset by URL or public id.

        Raises:
            CloudinaryError: If the media host request fails.
        """
        public_id = extract_public_id(url_or_public_id, self.client.folder)
        if public_id is None:
            logger.warning("Could not derive public id from %s", url_or_public_id)
            return "not found"
        return await self.client.destroy_any(public_id)


class CompensatingActions:
    """Best-effort cleanup steps deferred until the primary mutation commits.

    Actions are queued while a request runs and executed by ``run()`` once the
    database transaction succeeded. Failures are logged and reported to
    Sentry; they never reach the caller.
    """

    def __init__(self) -> None:
        self._actions: list[tuple[str, Callable[[], Awaitable[Any]]]] = []

    def __len__(self) -> int:
        return len(self._actions)

    def add(self, description: str, action: Callable[[], Awaitable[Any]]) -> None:
        self._actions.append((description, action))

    def delete_media(self, media: MediaService, urls: Iterable[str | None]) -> None:
        for url in urls:
            if not url:
                continue
            self.add(f"delete media {url}", lambda url=url: media.delete(url))

    async def run(self) -> int:
        """Execute queued actions in order. Returns the number that failed."""
        failures = 0
        actions, self._actions = self._actions, []
        for description, action in actions:
            try:
                await action()
            except Exception as e:
                failures += 1
                logger.exception("Compensating action failed: %s", description)
                sentry_sdk.capture_exception(e)
        return failures
