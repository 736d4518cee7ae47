"""SMS delivery service using the Twilio REST API."""

import logging

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


class SmsService:
    """Sends verification codes by SMS.

    Falls back to console mode (log only) when Twilio credentials are missing.
    """

    def __init__(
        self,
        account_sid: str | None = None,
        auth_token: str | None = None,
        from_number: str | None = None,
    ) -> None:
        self.account_sid = settings.twilio_account_sid if account_sid is None else account_sid
        self.auth_token = settings.twilio_auth_token if auth_token is None else auth_token
        self.from_number = settings.twilio_from_number if from_number is None else from_number

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    async def send_otp(self, phone: str, code: str) -> str | None:
        """Send a verification code. Returns the Twilio message SID or None."""
        if not self.is_configured:
            logger.warning("Twilio not configured, OTP for %s is %s", phone, code)
            return None

        body = (
            f"Your Site Snap verification code is {code}. "
            f"It expires in {settings.otp_ttl_minutes} minutes."
        )
        return await self.send(phone, body)

    async def send(self, phone: str, body: str) -> str | None:
        url = f"{TWILIO_API_BASE}/Accounts/{self.account_sid}/Messages.json"
        try:
            async with httpx.AsyncClient(timeout=15.0) as client:
                response = await client.post(
                    url,
                    auth=(self.account_sid, self.auth_token),
                    data={"To": phone, "From": self.from_number, "Body": body},
                )
                if response.is_success:
                    sid = response.json().get("sid")
                    logger.info("SMS sent: to=%s sid=%s", phone, sid)
                    return str(sid) if sid else None
                logger.error(
                    "Failed to send SMS: to=%s status=%s body=%s",
                    phone,
                    response.status_code,
                    response.text[:500],
                )
                return None
        except httpx.HTTPError:
            logger.exception("Error sending SMS to %s", phone)
            return None
