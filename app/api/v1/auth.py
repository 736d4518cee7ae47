"""Authentication endpoints: password, phone OTP and Google sign-in."""

from fastapi import APIRouter, Request, status

from app.core.deps import CurrentUser, Identity
from app.core.rate_limit import limiter
from app.schemas.auth import (
    AuthResponse,
    GoogleAuthRequest,
    LoginRequest,
    MeResponse,
    OtpDispatchResponse,
    PhoneOtpRequest,
    RegisterRequest,
    ResendOtpRequest,
    UserResponse,
    VerifyEmailOtpRequest,
    VerifyPhoneOtpRequest,
)
from app.schemas.common import ApiResponse
from app.services.identity_service import AuthSession

router = APIRouter()


def _auth_response(session: AuthSession) -> ApiResponse[AuthResponse]:
    return ApiResponse[AuthResponse](
        data=AuthResponse(token=session.token, user=UserResponse.model_validate(session.user)),
    )


# === Email / password ===


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register with email and password",
    description="Creates an unverified account and emails a verification code. "
    "No token is issued until the email is verified.",
)
@limiter.limit("10/minute")
async def register(
    request: Request,  # noqa: ARG001 (used by slowapi)
    data: RegisterRequest,
    identity: Identity,
) -> ApiResponse[UserResponse]:
    user = await identity.register_with_password(data.email, data.password)
    return ApiResponse[UserResponse](
        data=UserResponse.model_validate(user),
        message="Verification code sent to your email",
    )


@router.post("/verify-email-otp", response_model=ApiResponse[AuthResponse])
@limiter.limit("10/minute")
async def verify_email_otp(
    request: Request,  # noqa: ARG001 (used by slowapi)
    data: VerifyEmailOtpRequest,
    identity: Identity,
) -> ApiResponse[AuthResponse]:
    """Verify the emailed code and receive a session token."""
    return _auth_response(await identity.verify_email_otp(data.email, data.otp))


@router.post("/login", response_model=ApiResponse[AuthResponse])
@limiter.limit("10/minute")
async def login(
    request: Request,  # noqa: ARG001 (used by slowapi)
    data: LoginRequest,
    identity: Identity,
) -> ApiResponse[AuthResponse]:
    return _auth_response(await identity.login_with_password(data.email, data.password))


# === Phone ===


@router.post("/phone/send-otp", response_model=ApiResponse[OtpDispatchResponse])
@limiter.limit("5/minute")
async def send_phone_otp(
    request: Request,  # noqa: ARG001 (used by slowapi)
    data: PhoneOtpRequest,
    identity: Identity,
) -> ApiResponse[OtpDispatchResponse]:
    """Send a verification code by SMS, creating the account if needed."""
    user = await identity.send_phone_otp(data.phone, data.email)
    return ApiResponse[OtpDispatchResponse](
        data=OtpDispatchResponse(user_id=user.id, channel="phone"),
        message="Verification code sent to your phone",
    )


@router.post("/phone/verify-otp", response_model=ApiResponse[AuthResponse])
@limiter.limit("10/minute")
async def verify_phone_otp(
    request: Request,  # noqa: ARG001 (used by slowapi)
    data: VerifyPhoneOtpRequest,
    identity: Identity,
) -> ApiResponse[AuthResponse]:
    return _auth_response(await identity.verify_phone_otp(data.phone, data.otp))


# === Google ===


@router.post("/google", response_model=ApiResponse[AuthResponse])
@limiter.limit("20/minute")
async def google_auth(
    request: Request,  # noqa: ARG001 (used by slowapi)
    data: GoogleAuthRequest,
    identity: Identity,
) -> ApiResponse[AuthResponse]:
    """Sign in with a Google ID token."""
    return _auth_response(await identity.federated_login(data.id_token))


# === Codes and current user ===


@router.post("/resend-otp", response_model=ApiResponse[OtpDispatchResponse])
@limiter.limit("5/minute")
async def resend_otp(
    request: Request,  # noqa: ARG001 (used by slowapi)
    data: ResendOtpRequest,
    identity: Identity,
) -> ApiResponse[OtpDispatchResponse]:
    user = await identity.resend_otp(data.channel, data.value)
    return ApiResponse[OtpDispatchResponse](
        data=OtpDispatchResponse(user_id=user.id, channel=data.channel),
        message="Verification code sent",
    )


@router.get("/me", response_model=ApiResponse[MeResponse])
async def get_me(user: CurrentUser, identity: Identity) -> ApiResponse[MeResponse]:
    """Return the authenticated user with their seller profile."""
    me = await identity.get_me(user)
    return ApiResponse[MeResponse](data=MeResponse.model_validate(me))
