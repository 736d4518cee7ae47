"""Pydantic schemas for request/response validation."""

from app.schemas.common import ApiResponse, BaseSchema, HealthResponse, RecordSchema

__all__ = [
    "ApiResponse",
    "BaseSchema",
    "HealthResponse",
    "RecordSchema",
]
