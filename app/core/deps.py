"""Dependency injection for FastAPI routes."""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated

import redis.asyncio as aioredis
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

# Re-export auth dependencies for convenience
from app.core.auth import (
    AdminUser,
    CurrentUser,
    OptionalUser,
    get_admin_user,
    get_current_user,
    get_optional_user,
)
from app.core.config import get_settings, settings
from app.core.database import get_async_session
from app.core.exceptions import Unauthenticated
from app.core.policy import Actor
from app.integrations.cloudinary.client import build_cloudinary_client
from app.integrations.google.oauth import GoogleTokenVerifier, build_oauth_verifier
from app.models.user import User
from app.services.email_service import EmailService
from app.services.identity_service import IdentityService
from app.services.media_service import MediaService
from app.services.sms_service import SmsService

# Database session dependency (one session per request, shared with auth)
DBSession = Annotated[AsyncSession, Depends(get_async_session)]


# Shared Redis connection pool
_redis_pool: aioredis.ConnectionPool | None = None


def _get_redis_pool() -> aioredis.ConnectionPool:
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is None:
        _redis_pool = aioredis.ConnectionPool.from_url(
            str(settings.redis_url), decode_responses=True
        )
    return _redis_pool


async def get_redis() -> AsyncGenerator[aioredis.Redis, None]:
    """Yield a Redis client from the shared connection pool."""
    pool = _get_redis_pool()
    r = aioredis.Redis(connection_pool=pool)
    try:
        yield r
    finally:
        await r.aclose()


RedisClient = Annotated[aioredis.Redis, Depends(get_redis)]


# === Outbound collaborators ===


def get_email_service() -> EmailService:
    return EmailService()


def get_sms_service() -> SmsService:
    return SmsService()


def get_media_service() -> MediaService:
    return MediaService(build_cloudinary_client())


@lru_cache
def get_oauth_verifier() -> GoogleTokenVerifier | None:
    """Google verifier built once from settings; None when not configured."""
    return build_oauth_verifier(get_settings())


Media = Annotated[MediaService, Depends(get_media_service)]


def get_identity_service(
    db: DBSession,
    redis: RedisClient,
    email_sender: EmailService = Depends(get_email_service),
    sms_sender: SmsService = Depends(get_sms_service),
    oauth_verifier: GoogleTokenVerifier | None = Depends(get_oauth_verifier),
) -> IdentityService:
    return IdentityService(db, redis, email_sender, sms_sender, oauth_verifier)


Identity = Annotated[IdentityService, Depends(get_identity_service)]


# === Actors ===


def get_current_actor(user: User = Depends(get_current_user)) -> Actor:
    actor = Actor.from_user(user)
    if actor is None:
        raise Unauthenticated()
    return actor


def get_optional_actor(user: User | None = Depends(get_optional_user)) -> Actor | None:
    return Actor.from_user(user)


CurrentActor = Annotated[Actor, Depends(get_current_actor)]
OptionalActor = Annotated[Actor | None, Depends(get_optional_actor)]


__all__ = [
    "AdminUser",
    "CurrentActor",
    "CurrentUser",
    "DBSession",
    "Identity",
    "Media",
    "OptionalActor",
    "OptionalUser",
    "RedisClient",
    "get_admin_user",
    "get_current_actor",
    "get_current_user",
    "get_email_service",
    "get_identity_service",
    "get_media_service",
    "get_oauth_verifier",
    "get_optional_actor",
    "get_optional_user",
    "get_redis",
    "get_sms_service",
]
