"""Business (storefront) handler."""

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFound
from app.core.policy import BUSINESSES, SITES, Actor, Operation, authorize
from app.models.business import Business
from app.models.site import Site
from app.services.media_service import CompensatingActions
from app.services.resource_service import ResourceService


async def site_owners(db: AsyncSession, site_id: uuid.UUID) -> frozenset[uuid.UUID]:
    """Sellers owning a business that publishes the given site."""
    result = await db.execute(
        select(Business.seller_id).where(Business.site_id == site_id).distinct()
    )
    return frozenset(result.scalars().all())


class BusinessService(ResourceService[Business]):
    model = Business
    policy = BUSINESSES

    async def assign(
        self,
        record: Business,
        data: dict[str, Any],
        actor: Actor | None,
        cleanup: CompensatingActions,
    ) -> None:
        site_id = data.get("site_id")
        if site_id is not None and site_id != record.site_id:
            if await self.db.get(Site, site_id) is None:
                raise NotFound("Site not found")
            owners = await site_owners(self.db, site_id)
            # A site nobody publishes yet can be claimed
            if owners:
                authorize(actor, SITES, Operation.UPDATE, owners)
        await super().assign(record, data, actor, cleanup)

    async def list_for_seller(self, seller_id: uuid.UUID) -> list[Business]:
        result = await self.db.execute(
            select(Business)
            .where(Business.seller_id == seller_id)
            .order_by(Business.created_at.desc())
        )
        return list(result.scalars().all())
