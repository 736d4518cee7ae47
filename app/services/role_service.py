"""Seller-profile lifecycle and the role changes it drives."""

import logging
import uuid
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    AlreadyHasSellerProfile,
    Forbidden,
    NoSellerProfile,
    NotFound,
    RoleNotEligible,
)
from app.models.product import Product
from app.models.seller import Seller
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)

ME = "me"


class RoleTransitionService:
    """Creates and removes seller profiles together with the owner's role.

    Linking a seller profile promotes a visitor to seller; removing it demotes
    the seller back to visitor. Each transition runs in one transaction with
    the user row locked, so a profile and its link never exist apart.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _lock_user(self, user_id: uuid.UUID) -> User:
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFound("User not found")
        return user

    async def get_seller(self, seller_id: uuid.UUID) -> Seller:
        seller = await self.db.get(Seller, seller_id)
        if seller is None:
            raise NotFound("Seller not found")
        return seller

    async def promote_to_seller(self, user_id: uuid.UUID, data: dict[str, Any]) -> Seller:
        """Create a seller profile for a user and link it.

        Raises:
            AlreadyHasSellerProfile: The user already has a linked profile.
            RoleNotEligible: The user is an admin.
        """
        try:
            user = await self._lock_user(user_id)
            if user.seller_id is not None:
                raise AlreadyHasSellerProfile()
            if user.role == UserRole.ADMIN:
                raise RoleNotEligible()

            seller = Seller(**data)
            self.db.add(seller)
            await self.db.flush()

            user.seller_id = seller.id
            if user.role == UserRole.VISITOR:
                user.role = UserRole.SELLER
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(seller)
        logger.info("User promoted to seller: user=%s seller=%s", user_id, seller.id)
        return seller

    async def demote_from_seller(self, user_id: uuid.UUID) -> list[str]:
        """Remove a user's seller profile and downgrade the role.

        The profile's businesses, products and categories go with it. Returns
        the image URLs of removed products so the caller can clean them up.

        Raises:
            NoSellerProfile: The user has no linked profile.
        """
        try:
            user = await self._lock_user(user_id)
            seller_id = user.seller_id
            if seller_id is None:
                raise NoSellerProfile()

            media_urls = await self._product_images(seller_id)

            user.seller_id = None
            if user.role == UserRole.SELLER:
                user.role = UserRole.VISITOR
            await self.db.flush()

            await self.db.execute(delete(Seller).where(Seller.id == seller_id))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info("Seller profile removed: user=%s seller=%s", user_id, seller_id)
        return media_urls

    async def remove_seller(self, seller_id: uuid.UUID) -> list[str]:
        """Delete a seller profile by id, demoting whichever user owns it."""
        result = await self.db.execute(select(User.id).where(User.seller_id == seller_id))
        owner_id = result.scalar_one_or_none()
        if owner_id is not None:
            return await self.demote_from_seller(owner_id)

        # Profile with no linked user
        await self.get_seller(seller_id)
        media_urls = await self._product_images(seller_id)
        await self.db.execute(delete(Seller).where(Seller.id == seller_id))
        await self.db.commit()
        logger.info("Unlinked seller profile removed: seller=%s", seller_id)
        return media_urls

    async def update_seller(self, seller_id: uuid.UUID, data: dict[str, Any]) -> Seller:
        seller = await self.get_seller(seller_id)
        for field, value in data.items():
            setattr(seller, field, value)
        await self.db.commit()
        await self.db.refresh(seller)
        return seller

    async def _product_images(self, seller_id: uuid.UUID) -> list[str]:
        result = await self.db.execute(select(Product.images).where(Product.seller_id == seller_id))
        return [url for images in result.scalars() for url in (images or [])]


def self_or_admin_guard(actor: User, target: str | uuid.UUID) -> uuid.UUID:
    """Resolve a seller id path parameter for the acting user.

    ``"me"`` resolves to the actor's own seller id. Any other id is allowed
    for admins and for the user who owns that seller profile.

    Raises:
        NoSellerProfile: ``"me"`` was used by a user without a profile.
        Forbidden: The actor neither is an admin nor owns the profile.
        NotFound: The id is not a valid seller id.
    """
    if isinstance(target, str):
        if target == ME:
            if actor.seller_id is None:
                raise NoSellerProfile()
            return actor.seller_id
        try:
            target = uuid.UUID(target)
        except ValueError:
            raise NotFound("Seller not found")

    if actor.role == UserRole.ADMIN or actor.seller_id == target:
        return target
    raise Forbidden("Access denied. You can only manage your own seller profile.")
