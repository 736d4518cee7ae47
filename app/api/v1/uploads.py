"""Media upload endpoints."""

from fastapi import APIRouter, File, UploadFile, status

from app.core.deps import CurrentUser, DBSession, Media
from app.schemas.admin import Base64UploadRequest, UploadResponse
from app.schemas.common import ApiResponse
from app.services.upload_service import IncomingFile, UploadService, decode_data_url

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[UploadResponse],
    status_code=status.HTTP_201_CREATED,
)
async def upload_files(
    user: CurrentUser,
    db: DBSession,
    media: Media,
    files: list[UploadFile] = File(..., description="Images or videos to upload"),
) -> ApiResponse[UploadResponse]:
    incoming = [
        IncomingFile(
            filename=file.filename or "file",
            mime_type=file.content_type or "application/octet-stream",
            data=await file.read(),
        )
        for file in files
    ]
    record = await UploadService(db, media).upload(incoming, user.id)
    return ApiResponse[UploadResponse](
        data=UploadResponse.model_validate(record),
        count=len(record.files),
        message="Files uploaded",
    )


@router.post(
    "/base64",
    response_model=ApiResponse[UploadResponse],
    status_code=status.HTTP_201_CREATED,
)
async def upload_base64(
    data: Base64UploadRequest,
    user: CurrentUser,
    db: DBSession,
    media: Media,
) -> ApiResponse[UploadResponse]:
    """Upload files sent as base64 data URLs."""
    incoming = [decode_data_url(item.data, item.filename) for item in data.files]
    record = await UploadService(db, media).upload(incoming, user.id)
    return ApiResponse[UploadResponse](
        data=UploadResponse.model_validate(record),
        count=len(record.files),
        message="Files uploaded",
    )
