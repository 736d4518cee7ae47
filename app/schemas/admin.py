"""Pydantic schemas for admin user management and uploads."""

from uuid import UUID

from pydantic import Field

from app.models.user import UserRole
from app.schemas.common import BaseSchema, RecordSchema


class RoleUpdate(BaseSchema):
    role: UserRole = Field(..., description="One of visitor, seller, admin")


# === Uploads ===


class Base64File(BaseSchema):
    data: str = Field(..., description="data:<mime>;base64,<payload>")
    filename: str | None = Field(default=None, max_length=255)


class Base64UploadRequest(BaseSchema):
    files: list[Base64File] = Field(..., min_length=1)


class UploadedFile(BaseSchema):
    url: str
    public_id: str
    resource_type: str


class UploadResponse(RecordSchema):
    files: list[UploadedFile]
    uploaded_by: UUID | None
