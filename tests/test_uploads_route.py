"""Tests for media upload endpoints."""

import base64

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Upload, User
from tests.conftest import FakeCloudinaryClient, auth_headers

UPLOADS = "/api/v1/uploads"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def _data_url(mime: str, payload: bytes = PNG_BYTES) -> str:
    return f"data:{mime};base64,{base64.b64encode(payload).decode()}"


async def _upload_count(db_session: AsyncSession) -> int:
    return (await db_session.execute(select(func.count(Upload.id)))).scalar_one()


class TestMultipartUpload:
    async def test_upload_files(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        visitor: User,
        media_client: FakeCloudinaryClient,
    ) -> None:
        response = await client.post(
            UPLOADS,
            files=[
                ("files", ("logo.png", PNG_BYTES, "image/png")),
                ("files", ("intro.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")),
            ],
            headers=auth_headers(visitor),
        )
        assert response.status_code == 201
        body = response.json()
        assert body["count"] == 2
        assert body["message"] == "Files uploaded"
        files = body["data"]["files"]
        assert [f["public_id"] for f in files] == ["site-snap/logo-0", "site-snap/intro-1"]
        assert [f["resource_type"] for f in files] == ["image", "video"]
        assert body["data"]["uploaded_by"] == str(visitor.id)
        assert len(media_client.uploaded) == 2
        assert await _upload_count(db_session) == 1

    async def test_invalid_type_rejected(
        self, client: AsyncClient, visitor: User, media_client: FakeCloudinaryClient
    ) -> None:
        response = await client.post(
            UPLOADS,
            files=[("files", ("notes.txt", b"hello", "text/plain"))],
            headers=auth_headers(visitor),
        )
        assert response.status_code == 400
        assert "Invalid file type" in response.json()["message"]
        assert media_client.uploaded == []

    async def test_requires_authentication(self, client: AsyncClient) -> None:
        response = await client.post(
            UPLOADS, files=[("files", ("logo.png", PNG_BYTES, "image/png"))]
        )
        assert response.status_code == 401

    async def test_failure_mid_batch_removes_earlier_files(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        seller_user: User,
        media_client: FakeCloudinaryClient,
    ) -> None:
        media_client.fail_on = {"second.png"}

        response = await client.post(
            UPLOADS,
            files=[
                ("files", ("first.png", PNG_BYTES, "image/png")),
                ("files", ("second.png", PNG_BYTES, "image/png")),
            ],
            headers=auth_headers(seller_user),
        )
        assert response.status_code == 502
        assert response.json()["error"] == "UpstreamFailure"
        assert media_client.destroyed == ["site-snap/first-0"]
        assert await _upload_count(db_session) == 0


class TestBase64Upload:
    async def test_upload_data_urls(
        self, client: AsyncClient, seller_user: User, media_client: FakeCloudinaryClient
    ) -> None:
        response = await client.post(
            f"{UPLOADS}/base64",
            json={"files": [{"data": _data_url("image/png"), "filename": "banner.png"}]},
            headers=auth_headers(seller_user),
        )
        assert response.status_code == 201
        assert response.json()["data"]["files"][0]["public_id"] == "site-snap/banner-0"

    async def test_not_a_data_url(self, client: AsyncClient, seller_user: User) -> None:
        response = await client.post(
            f"{UPLOADS}/base64",
            json={"files": [{"data": "aGVsbG8="}]},
            headers=auth_headers(seller_user),
        )
        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    async def test_corrupt_payload(self, client: AsyncClient, seller_user: User) -> None:
        response = await client.post(
            f"{UPLOADS}/base64",
            json={"files": [{"data": "data:image/png;base64,***"}]},
            headers=auth_headers(seller_user),
        )
        assert response.status_code == 400

    async def test_empty_batch(self, client: AsyncClient, seller_user: User) -> None:
        response = await client.post(
            f"{UPLOADS}/base64", json={"files": []}, headers=auth_headers(seller_user)
        )
        assert response.status_code == 400
