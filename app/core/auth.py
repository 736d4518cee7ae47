"""Bearer-token authentication for FastAPI routes."""

import uuid
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_async_session
from app.core.exceptions import AppError, Forbidden, Unauthenticated
from app.core.security import decode_access_token
from app.models.user import User, UserRole

# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def resolve_user(token: str, db: AsyncSession) -> User:
    """Verify a session token and load the user it names.

    Raises:
        Unauthenticated: If the token is invalid or the user no longer exists.
    """
    payload = decode_access_token(token)
    try:
        user_id = uuid.UUID(str(payload["sub"]))
    except ValueError:
        raise Unauthenticated("Not authorized, token failed")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise Unauthenticated("User not found")
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Get the authenticated user from the Authorization header.

    Raises:
        Unauthenticated: If no token is provided or the token is invalid
    """
    if credentials is None:
        raise Unauthenticated("Not authorized, no token")

    return await resolve_user(credentials.credentials, db)


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_async_session),
) -> User | None:
    """Get the current user if authenticated, otherwise return None.

    Used by public storefront endpoints where a missing or broken token means
    "anonymous", not an error.
    """
    if credentials is None:
        return None

    try:
        return await resolve_user(credentials.credentials, db)
    except AppError:
        return None


async def get_admin_user(user: User = Depends(get_current_user)) -> User:
    """Require an authenticated admin."""
    if user.role != UserRole.ADMIN:
        raise Forbidden("Access denied. Admin privileges required.")
    return user


# Type aliases for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
AdminUser = Annotated[User, Depends(get_admin_user)]
