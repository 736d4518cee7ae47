"""Cloudinary upload API client using httpx."""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

CLOUDINARY_API_BASE = "https://api.cloudinary.com/v1_1"


class CloudinaryError(Exception):
    """Raised when Cloudinary rejects a request or cannot be reached."""


@dataclass(frozen=True)
class UploadedAsset:
    url: str
    public_id: str
    resource_type: str

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "public_id": self.public_id, "resource_type": self.resource_type}


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """Compute the Cloudinary request signature.

    Parameters are sorted by name, joined as ``k=v`` pairs with ``&`` and
    suffixed with the API secret before hashing.
    """
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] != "")
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


def _is_version(segment: str) -> bool:
    return len(segment) > 1 and segment[0] == "v" and segment[1:].isdigit()


def _strip_extension(name: str) -> str:
    return name.rsplit(".", 1)[0] if "." in name else name


def extract_public_id(url_or_public_id: str, folder: str | None = None) -> str | None:
    """Derive an asset's public id from its delivery URL.

    Delivery URLs look like
    ``https://res.cloudinary.com/<cloud>/image/upload/[<transforms>/]v123/<folder>/<name>.<ext>``.
    Anything that is not a Cloudinary URL is taken to be a public id already.
    """
    if not url_or_public_id:
        return None
    folder = settings.cloudinary_folder if folder is None else folder

    if "cloudinary.com" not in url_or_public_id:
        public_id = url_or_public_id
    else:
        parts = [part for part in urlparse(url_or_public_id).path.split("/") if part]
        if "upload" not in parts:
            return None
        after_upload = parts[parts.index("upload") + 1 :]
        if not after_upload:
            return None

        version_index = next(
            (index for index, part in enumerate(after_upload) if _is_version(part)), None
        )
        if version_index is not None and version_index + 1 < len(after_upload):
            public_id = _strip_extension("/".join(after_upload[version_index + 1 :]))
        else:
            public_id = _strip_extension(after_upload[-1])
            if len(after_upload) > 1 and after_upload[-2] == folder:
                public_id = f"{folder}/{public_id}"

    if folder and "/" not in public_id:
        public_id = f"{folder}/{public_id}"
    return public_id


class CloudinaryClient:
    """Async client for Cloudinary's signed upload and destroy endpoints."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "site-snap",
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.base_url = f"{CLOUDINARY_API_BASE}/{cloud_name}"

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _signed(self, params: dict[str, Any]) -> dict[str, Any]:
        params = {**params, "timestamp": int(time.time())}
        return {
            **params,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }

    async def upload(self, data: bytes, mime_type: str, filename: str = "file") -> UploadedAsset:
        """Upload raw bytes, letting Cloudinary detect image vs video."""
        if not self.is_configured:
            raise CloudinaryError("Cloudinary credentials are not configured")

        form = self._signed({"folder": self.folder})
        try:
            async with httpx.AsyncClient(timeout=60.0) as client:
                response = await client.post(
                    f"{self.base_url}/auto/upload",
                    data=form,
                    files={"file": (filename, data, mime_type)},
                )
        except httpx.HTTPError as e:
            raise CloudinaryError(f"Upload request failed: {e}") from e

        if not response.is_success:
            raise CloudinaryError(
                f"Upload rejected: status={response.status_code} body={response.text[:500]}"
            )

        body = response.json()
        return UploadedAsset(
            url=body["secure_url"],
            public_id=body["public_id"],
            resource_type=body.get("resource_type", "image"),
        )

    async def destroy(self, public_id: str, resource_type: str = "image") -> str:
        """Delete an asset. Returns Cloudinary's result (``ok``, ``not found``)."""
        if not self.is_configured:
            raise CloudinaryError("Cloudinary credentials are not configured")

        form = self._signed({"public_id": public_id})
        try:
            async with httpx.AsyncClient(timeout=30.0) as client:
                response = await client.post(
                    f"{self.base_url}/{resource_type}/destroy",
                    data=form,
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise CloudinaryError(f"Destroy request failed for {public_id}: {e}") from e

        return str(response.json().get("result", "error"))

    async def destroy_any(self, public_id: str) -> str:
        """Delete an asset whose resource type is unknown: image first, then video."""
        result = await self.destroy(public_id, "image")
        if result == "not found":
            result = await self.destroy(public_id, "video")
        logger.info("Cloudinary destroy: public_id=%s result=%s", public_id, result)
        return result


def build_cloudinary_client() -> CloudinaryClient:
    return CloudinaryClient(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        folder=settings.cloudinary_folder,
    )
