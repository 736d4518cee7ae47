"""Google ID token verification against Google's published JWKS."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import jwt
from jwt import PyJWKClient, PyJWKClientError

from app.core.config import Settings
from app.core.exceptions import InvalidToken

logger = logging.getLogger(__name__)

GOOGLE_ISSUERS = frozenset({"accounts.google.com", "https://accounts.google.com"})


@dataclass(frozen=True)
class GoogleIdentity:
    subject: str
    email: str | None
    email_verified: bool
    name: str | None = None


class GoogleTokenVerifier:
    """Verifies Google Sign-In ID tokens for a single OAuth client id."""

    def __init__(self, client_id: str, jwks_url: str) -> None:
        self.client_id = client_id
        self._jwks_client = PyJWKClient(jwks_url, cache_keys=True)

    def _decode(self, token: str) -> dict[str, Any]:
        signing_key = self._jwks_client.get_signing_key_from_jwt(token)
        payload: dict[str, Any] = jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            audience=self.client_id,
            options={"require": ["sub", "iss", "exp"]},
        )
        return payload

    async def verify(self, token: str) -> GoogleIdentity:
        """Verify an ID token and extract the caller's identity.

        Key fetching and signature checks are blocking, so they run in a
        worker thread.

        Raises:
            InvalidToken: If the token fails any signature, audience, issuer
                or expiry check.
        """
        try:
            payload = await asyncio.to_thread(self._decode, token)
        except (jwt.InvalidTokenError, PyJWKClientError) as e:
            logger.info("Google token rejected: %s", e)
            raise InvalidToken()

        if payload.get("iss") not in GOOGLE_ISSUERS:
            logger.info("Google token rejected: unexpected issuer %s", payload.get("iss"))
            raise InvalidToken()

        email = payload.get("email")
        return GoogleIdentity(
            subject=str(payload["sub"]),
            email=email.lower() if email else None,
            email_verified=bool(payload.get("email_verified", False)),
            name=payload.get("name"),
        )


def build_oauth_verifier(settings: Settings) -> GoogleTokenVerifier | None:
    """Build the verifier from settings, or None when Google sign-in is off."""
    if not settings.google_client_id:
        return None
    return GoogleTokenVerifier(settings.google_client_id, settings.google_jwks_url)
