"""Common Pydantic schemas used across the API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

# Loose shape checks; delivery is the real proof of ownership
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PHONE_PATTERN = r"^\+?[1-9]\d{1,14}$"
OTP_PATTERN = r"^\d{6}$"


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class RecordSchema(BaseSchema):
    """Fields every stored record carries."""

    id: UUID
    created_at: datetime
    updated_at: datetime


class ApiResponse[T](BaseSchema):
    """Response envelope shared by every endpoint."""

    success: bool = True
    data: T | None = None
    count: int | None = None
    message: str | None = None
    error: str | None = None


class HealthResponse(BaseSchema):
    """Health check response schema."""

    status: str
    version: str
    environment: str
    checks: dict[str, str]
