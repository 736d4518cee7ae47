"""Email delivery service using Resend API."""

import logging
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"

OTP_SUBJECT = "Your Site Snap verification code"


def render_otp_email(code: str, ttl_minutes: int) -> str:
    return (
        "<div style=\"font-family: sans-serif\">"
        "<h2>Verify your email</h2>"
        f"<p>Your verification code is <strong>{code}</strong>.</p>"
        f"<p>The code expires in {ttl_minutes} minutes.</p>"
        "</div>"
    )


class EmailService:
    """Sends transactional emails via the Resend API.

    Without an API key the service runs in console mode: the message is
    logged instead of being sent.
    """

    def __init__(self, api_key: str | None = None, from_address: str | None = None) -> None:
        self.api_key = settings.resend_api_key if api_key is None else api_key
        self.from_address = from_address or settings.email_from

    async def send_otp(self, to_email: str, code: str) -> str | None:
        """Send a verification code.

        Returns the Resend email ID on success, None on failure.
        """
        if not self.api_key:
            logger.warning(
                "Resend API key not configured, OTP for %s is %s", to_email, code
            )
            return None

        return await self.send(
            to_email,
            OTP_SUBJECT,
            render_otp_email(code, settings.otp_ttl_minutes),
        )

    async def send(self, to_email: str, subject: str, html_content: str) -> str | None:
        payload: dict[str, Any] = {
            "from": self.from_address,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }

        try:
            async with httpx.AsyncClient(timeout=15.0) as client:
                response = await client.post(
                    RESEND_API_URL,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
                if response.is_success:
                    email_id = response.json().get("id")
                    logger.info("Email sent: to=%s id=%s", to_email, email_id)
                    return str(email_id) if email_id else None
                logger.error(
                    "Failed to send email: to=%s status=%s body=%s",
                    to_email,
                    response.status_code,
                    response.text[:500],
                )
                return None
        except httpx.HTTPError:
            logger.exception("Error sending email to %s", to_email)
            return None
