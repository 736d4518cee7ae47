"""Registration, login, OTP verification and Google federation."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

import redis.asyncio as aioredis
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import (
    DuplicateIdentity,
    EmailNotVerified,
    InvalidCredentials,
    InvalidOrExpiredOtp,
    InvalidToken,
    NoPendingOtp,
    NotFound,
    ProviderNotConfigured,
    ValidationFailed,
)
from app.core.security import create_access_token, hash_password, verify_password
from app.integrations.google.oauth import GoogleTokenVerifier
from app.models.user import User, UserRole
from app.services.email_service import EmailService
from app.services.otp_service import (
    OtpAttemptLimiter,
    generate_otp,
    otp_expiration,
    verify_otp,
)
from app.services.sms_service import SmsService

logger = logging.getLogger(__name__)

OtpChannel = Literal["email", "phone"]


@dataclass(frozen=True)
class AuthSession:
    user: User
    token: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityService:
    """Identity lifecycle for the email and phone verification tracks.

    Each channel moves independently from unregistered, to pending
    verification (an OTP is stored on the user), to verified. Session tokens
    are only issued once a channel is verified, or on password/Google login.
    """

    def __init__(
        self,
        db: AsyncSession,
        redis: aioredis.Redis,
        email_sender: EmailService,
        sms_sender: SmsService,
        oauth_verifier: GoogleTokenVerifier | None = None,
    ) -> None:
        self.db = db
        self.email_sender = email_sender
        self.sms_sender = sms_sender
        self.oauth_verifier = oauth_verifier
        self.attempts = OtpAttemptLimiter(redis)

    # === Lookups ===

    async def _get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def _get_by_phone(self, phone: str) -> User | None:
        result = await self.db.execute(select(User).where(User.phone == phone))
        return result.scalar_one_or_none()

    async def _get_by_google_id(self, google_id: str) -> User | None:
        result = await self.db.execute(select(User).where(User.google_id == google_id))
        return result.scalar_one_or_none()

    # === OTP helpers ===

    @staticmethod
    def _issue_otp(user: User, channel: OtpChannel) -> str:
        """Store a fresh code bound to ``channel``, replacing any pending one."""
        code = generate_otp()
        user.otp_code = code
        user.otp_expires_at = otp_expiration(datetime.now(UTC), settings.otp_ttl_minutes)
        user.otp_channel = channel
        return code

    async def _dispatch(self, channel: OtpChannel, destination: str, code: str) -> None:
        if channel == "email":
            await self.email_sender.send_otp(destination, code)
        else:
            await self.sms_sender.send_otp(destination, code)

    async def _consume_otp(self, user: User, channel: OtpChannel, code: str) -> None:
        """Check a code and clear it from the user on success.

        A code only verifies the channel it was sent to. Presenting it on the
        other channel fails and counts against the same attempt budget.
        """
        if not user.otp_code:
            raise NoPendingOtp()

        subject = str(user.id)
        await self.attempts.ensure_allowed(subject)

        matches = verify_otp(user.otp_code, user.otp_expires_at, code, datetime.now(UTC))
        if user.otp_channel != channel or not matches:
            await self.attempts.record_failure(subject)
            raise InvalidOrExpiredOtp()

        user.clear_otp()
        await self.attempts.reset(subject)

    @staticmethod
    def _check_identity(user: User) -> None:
        if not user.has_identity:
            raise ValidationFailed("An email, phone number or Google account is required")
        if user.requires_password and not user.password_hash:
            raise ValidationFailed("Please provide a password")

    def _session(self, user: User) -> AuthSession:
        return AuthSession(user=user, token=create_access_token(user.id))

    async def _save(self, user: User) -> None:
        await self.db.commit()
        await self.db.refresh(user)

    # === Email / password ===

    async def register_with_password(self, email: str, password: str) -> User:
        """Create a pending email account and send its verification code.

        No session token is issued until the email is verified.
        """
        email = normalize_email(email)
        if await self._get_by_email(email) is not None:
            raise DuplicateIdentity("An account with this email already exists")

        user = User(email=email, password_hash=hash_password(password))
        self._check_identity(user)
        code = self._issue_otp(user, "email")
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateIdentity("An account with this email already exists")
        await self.db.refresh(user)

        await self.attempts.reset(str(user.id))
        logger.info("User registered: id=%s", user.id)
        await self._dispatch("email", email, code)
        return user

    async def verify_email_otp(self, email: str, code: str) -> AuthSession:
        email = normalize_email(email)
        user = await self._get_by_email(email)
        if user is None:
            raise NotFound("User not found")

        await self._consume_otp(user, "email", code)
        user.email_verified = True
        await self._save(user)

        logger.info("Email verified: user=%s", user.id)
        return self._session(user)

    async def login_with_password(self, email: str, password: str) -> AuthSession:
        """Authenticate with email and password.

        Unknown emails, password-less accounts and wrong passwords all fail
        with the same error.
        """
        user = await self._get_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        if not user.email_verified:
            raise EmailNotVerified("Please verify your email before logging in")

        return self._session(user)

    # === Phone ===

    async def send_phone_otp(self, phone: str, email: str) -> User:
        """Start (or restart) phone verification.

        An existing phone record gets a fresh code, replacing any code in
        flight. A concurrent sign-up for the same phone is resolved by
        retrying once against the record that won the race.
        """
        email = normalize_email(email)

        for attempt in range(2):
            user = await self._get_by_phone(phone)
            if user is not None:
                code = self._issue_otp(user, "phone")
                await self._save(user)
                break

            owner = await self._get_by_email(email)
            if owner is not None:
                raise DuplicateIdentity("This email is already linked to another account")

            user = User(phone=phone, email=email)
            self._check_identity(user)
            code = self._issue_otp(user, "phone")
            self.db.add(user)
            try:
                await self._save(user)
                break
            except IntegrityError:
                await self.db.rollback()
                if attempt == 1:
                    raise DuplicateIdentity("An account with this phone number already exists")
                logger.info("Phone sign-up raced with another request, retrying")

        await self.attempts.reset(str(user.id))
        await self._dispatch("phone", phone, code)
        return user

    async def verify_phone_otp(self, phone: str, code: str) -> AuthSession:
        user = await self._get_by_phone(phone)
        if user is None:
            raise NotFound("User not found")

        await self._consume_otp(user, "phone", code)
        user.phone_verified = True
        await self._save(user)

        logger.info("Phone verified: user=%s", user.id)
        return self._session(user)

    async def resend_otp(self, channel: OtpChannel, value: str) -> User:
        """Issue and dispatch a new code for an existing identity."""
        if channel == "email":
            value = normalize_email(value)
            user = await self._get_by_email(value)
        else:
            user = await self._get_by_phone(value)

        if user is None:
            raise NotFound("User not found")

        code = self._issue_otp(user, channel)
        await self._save(user)

        await self.attempts.reset(str(user.id))
        await self._dispatch(channel, value, code)
        return user

    # === Google ===

    async def federated_login(self, id_token: str) -> AuthSession:
        """Sign in with a Google ID token, creating a visitor on first use."""
        if self.oauth_verifier is None:
            raise ProviderNotConfigured()

        identity = await self.oauth_verifier.verify(id_token)

        user = await self._get_by_google_id(identity.subject)
        if user is None and identity.email:
            user = await self._get_by_email(identity.email)
            if user is not None and not identity.email_verified:
                # Linking by an unverified email would hand over the account
                raise InvalidToken("Google account email is not verified")

        if user is not None:
            if user.google_id is None:
                user.google_id = identity.subject
            if identity.email and user.email == identity.email and identity.email_verified:
                user.email_verified = True
        else:
            user = User(
                email=identity.email,
                google_id=identity.subject,
                email_verified=bool(identity.email) and identity.email_verified,
                role=UserRole.VISITOR,
            )
            self._check_identity(user)
            self.db.add(user)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateIdentity("This Google account is already linked to another user")
        await self.db.refresh(user)

        logger.info("Google sign-in: user=%s", user.id)
        return self._session(user)

    # === Current user ===

    async def get_me(self, user: User) -> User:
        result = await self.db.execute(
            select(User).where(User.id == user.id).execution_options(populate_existing=True)
        )
        return result.scalar_one()
