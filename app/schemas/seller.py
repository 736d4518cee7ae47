"""Pydantic schemas for seller profiles."""

from pydantic import Field

from app.schemas.common import PHONE_PATTERN, BaseSchema, RecordSchema


class SellerCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    phone_number: str = Field(..., pattern=PHONE_PATTERN)
    whatsapp_number: str = Field(..., pattern=PHONE_PATTERN)
    address: str = Field(..., min_length=1)


class SellerUpdate(BaseSchema):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone_number: str | None = Field(default=None, pattern=PHONE_PATTERN)
    whatsapp_number: str | None = Field(default=None, pattern=PHONE_PATTERN)
    address: str | None = Field(default=None, min_length=1)


class SellerResponse(RecordSchema):
    name: str
    phone_number: str
    whatsapp_number: str
    address: str
