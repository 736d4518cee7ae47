"""One-time password generation, expiry and verification.

The functions here are pure over their inputs. Consuming an OTP after a
successful check is the caller's job. ``OtpAttemptLimiter`` adds the
per-user failed-attempt ceiling on top, backed by Redis.
"""

import hmac
import logging
import secrets
from datetime import UTC, datetime, timedelta

import redis.asyncio as aioredis

from app.core.config import settings
from app.core.exceptions import TooManyOtpAttempts

logger = logging.getLogger(__name__)

OTP_MIN = 100_000
OTP_MAX = 999_999
OTP_TTL_MINUTES = 10


def generate_otp() -> str:
    """Return a 6-digit code drawn uniformly from [100000, 999999]."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def otp_expiration(now: datetime, ttl_minutes: int = OTP_TTL_MINUTES) -> datetime:
    return now + timedelta(minutes=ttl_minutes)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def verify_otp(
    stored_code: str | None,
    stored_expiry: datetime | None,
    supplied_code: str | None,
    now: datetime,
) -> bool:
    """Check a supplied code against the stored one.

    Fails closed when any input is missing. A code is expired from the instant
    ``now`` reaches ``stored_expiry``.
    """
    if not stored_code or not supplied_code or stored_expiry is None:
        return False
    if _as_utc(now) >= _as_utc(stored_expiry):
        return False
    return hmac.compare_digest(stored_code.encode("utf-8"), supplied_code.encode("utf-8"))


class OtpAttemptLimiter:
    """Counts failed verification attempts per user.

    A user has at most one pending code, so one counter covers every
    verification endpoint. The counter lives as long as the OTP it guards
    and is reset whenever a new code is issued or a verification succeeds.
    """

    def __init__(
        self,
        redis: aioredis.Redis,
        max_attempts: int | None = None,
        window_minutes: int | None = None,
    ) -> None:
        self.redis = redis
        self.max_attempts = max_attempts or settings.otp_max_attempts
        self.window_seconds = (window_minutes or settings.otp_ttl_minutes) * 60

    @staticmethod
    def _key(subject: str) -> str:
        return f"otp_attempts:{subject}"

    async def ensure_allowed(self, subject: str) -> None:
        """Raise TooManyOtpAttempts once the failure ceiling is reached."""
        count = await self.redis.get(self._key(subject))
        if count is not None and int(count) >= self.max_attempts:
            raise TooManyOtpAttempts()

    async def record_failure(self, subject: str) -> int:
        key = self._key(subject)
        count = int(await self.redis.incr(key))
        if count == 1:
            await self.redis.expire(key, self.window_seconds)
        if count >= self.max_attempts:
            logger.warning("OTP attempt limit reached: user=%s", subject)
        return count

    async def reset(self, subject: str) -> None:
        await self.redis.delete(self._key(subject))
