"""Site details handler.

Sites carry no owner column. A site belongs to the sellers whose businesses
point at it, so every access check first resolves those businesses.
"""

import logging
import uuid
from typing import Any

from sqlalchemy import Select, select

from app.core.exceptions import NotFound
from app.core.policy import CATEGORIES, PRODUCTS, SITES, Actor, Operation, authorize
from app.models.business import Business
from app.models.category import Category
from app.models.hero_slide import HeroSlide
from app.models.product import Product
from app.models.site import Site
from app.models.story import Story
from app.services.business_service import site_owners
from app.services.media_service import CompensatingActions
from app.services.resource_service import ResourceService

logger = logging.getLogger(__name__)


class SiteService(ResourceService[Site]):
    model = Site
    policy = SITES

    async def owners_of(self, record: Site) -> frozenset[uuid.UUID]:
        return await site_owners(self.db, record.id)

    def scope(self, stmt: Select[Any], seller_id: uuid.UUID) -> Select[Any]:
        owned_sites = select(Business.site_id).where(
            Business.seller_id == seller_id,
            Business.site_id.is_not(None),
        )
        return stmt.where(Site.id.in_(owned_sites))

    async def _get_business(self, business_id: uuid.UUID) -> Business:
        business = await self.db.get(Business, business_id)
        if business is None:
            raise NotFound("Business not found")
        return business

    async def creation_owners(self, data: dict[str, Any]) -> frozenset[uuid.UUID]:
        business_id = data.get("business_id")
        if business_id is None:
            return frozenset()
        business = await self._get_business(business_id)
        return frozenset({business.seller_id})

    async def assign(
        self,
        record: Site,
        data: dict[str, Any],
        actor: Actor | None,
        cleanup: CompensatingActions,
    ) -> None:
        data.pop("business_id", None)

        hero_slide_ids = data.pop("hero_slide_ids", None)
        if hero_slide_ids is not None:
            record.hero_slides = await self.get_many(HeroSlide, hero_slide_ids)

        story_ids = data.pop("story_ids", None)
        if story_ids is not None:
            record.stories = await self.get_many(Story, story_ids)

        product_ids = data.pop("product_ids", None)
        if product_ids is not None:
            products: list[Product] = await self.get_many(Product, product_ids)
            for product in products:
                authorize(actor, PRODUCTS, Operation.READ, frozenset({product.seller_id}))
            record.products = products

        category_ids = data.pop("category_ids", None)
        if category_ids is not None:
            categories: list[Category] = await self.get_many(Category, category_ids)
            for category in categories:
                authorize(actor, CATEGORIES, Operation.READ, frozenset({category.seller_id}))
            record.categories = categories

        await super().assign(record, data, actor, cleanup)

    async def after_create(self, record: Site, data: dict[str, Any], actor: Actor | None) -> None:
        business_id = data.get("business_id")
        if business_id is None:
            return
        business = await self._get_business(business_id)
        business.site_id = record.id
        logger.info("Site %s linked to business %s", record.id, business_id)

    # === Hero slide attachments ===

    async def add_hero_slide(
        self, actor: Actor | None, site_id: uuid.UUID, hero_slide_id: uuid.UUID
    ) -> Site:
        site = await self.get_record(site_id)
        authorize(actor, SITES, Operation.UPDATE, await self.owners_of(site))

        slide = await self.db.get(HeroSlide, hero_slide_id)
        if slide is None:
            raise NotFound("Hero slide not found")

        if all(existing.id != slide.id for existing in site.hero_slides):
            site.hero_slides.append(slide)
            await self.db.commit()
        return await self.get_record(site_id)

    async def remove_hero_slide(
        self, actor: Actor | None, site_id: uuid.UUID, hero_slide_id: uuid.UUID
    ) -> Site:
        site = await self.get_record(site_id)
        authorize(actor, SITES, Operation.UPDATE, await self.owners_of(site))

        site.hero_slides = [slide for slide in site.hero_slides if slide.id != hero_slide_id]
        await self.db.commit()
        return await self.get_record(site_id)
