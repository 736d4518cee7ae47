"""Pydantic schemas for authentication and user identity."""

from typing import Literal, Self
from uuid import UUID

from pydantic import Field, model_validator

from app.models.user import UserRole
from app.schemas.common import (
    EMAIL_PATTERN,
    OTP_PATTERN,
    PHONE_PATTERN,
    BaseSchema,
    RecordSchema,
)
from app.schemas.seller import SellerResponse

# === Requests ===


class RegisterRequest(BaseSchema):
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseSchema):
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class VerifyEmailOtpRequest(BaseSchema):
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    otp: str = Field(..., pattern=OTP_PATTERN, description="6-digit verification code")


class PhoneOtpRequest(BaseSchema):
    """Phone sign-up requires an email for correspondence."""

    phone: str = Field(..., pattern=PHONE_PATTERN, description="Phone number with country code")
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)


class VerifyPhoneOtpRequest(BaseSchema):
    phone: str = Field(..., pattern=PHONE_PATTERN)
    otp: str = Field(..., pattern=OTP_PATTERN)


class GoogleAuthRequest(BaseSchema):
    id_token: str = Field(..., min_length=1, description="Google Sign-In ID token")


class ResendOtpRequest(BaseSchema):
    """Identify the account by exactly one of email or phone."""

    email: str | None = Field(default=None, pattern=EMAIL_PATTERN, max_length=255)
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)

    @model_validator(mode="after")
    def check_single_channel(self) -> Self:
        if (self.email is None) == (self.phone is None):
            raise ValueError("Provide either email or phone")
        return self

    @property
    def channel(self) -> Literal["email", "phone"]:
        return "email" if self.email is not None else "phone"

    @property
    def value(self) -> str:
        return self.email if self.email is not None else str(self.phone)


# === Responses ===


class UserResponse(RecordSchema):
    email: str | None
    phone: str | None
    email_verified: bool
    phone_verified: bool
    role: UserRole
    seller_id: UUID | None


class MeResponse(UserResponse):
    seller: SellerResponse | None = None


class AuthResponse(BaseSchema):
    token: str
    user: UserResponse


class OtpDispatchResponse(BaseSchema):
    """Returned when a code was (re)sent; never includes the code itself."""

    user_id: UUID
    channel: Literal["email", "phone"]
