"""Admin user management with self-protection rules."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFound, SelfModificationForbidden
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


class UserAdminService:
    """User listing, role changes and deletion for admins."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_users(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def get_user(self, user_id: uuid.UUID) -> User:
        result = await self.db.execute(
            select(User).where(User.id == user_id).execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFound("User not found")
        return user

    async def update_role(self, actor: User, user_id: uuid.UUID, role: UserRole) -> User:
        """Set a user's role.

        Raises:
            SelfModificationForbidden: An admin tried to drop their own admin role.
        """
        if actor.id == user_id and role != UserRole.ADMIN:
            raise SelfModificationForbidden("You cannot change your own role from admin")

        user = await self.get_user(user_id)
        user.role = role
        await self.db.commit()
        await self.db.refresh(user)

        logger.info("User role updated: user=%s role=%s by=%s", user_id, role.value, actor.id)
        return user

    async def delete_user(self, actor: User, user_id: uuid.UUID) -> None:
        """Delete an account. Nobody may delete their own account here."""
        if actor.id == user_id:
            raise SelfModificationForbidden("You cannot delete your own account")

        user = await self.get_user(user_id)
        await self.db.delete(user)
        await self.db.commit()

        logger.info("User deleted: user=%s by=%s", user_id, actor.id)
