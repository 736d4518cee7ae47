"""Product catalog handler."""

import logging
import uuid
from typing import Any

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFound
from app.core.policy import ATTRIBUTES, CATEGORIES, PRODUCTS, Actor, Operation, authorize
from app.models.associations import product_attributes
from app.models.attribute import Attribute
from app.models.category import Category
from app.models.product import Product
from app.services.media_service import CompensatingActions
from app.services.resource_service import ResourceService

logger = logging.getLogger(__name__)


async def attribute_owners(db: AsyncSession, attribute_id: uuid.UUID) -> frozenset[uuid.UUID]:
    """Sellers whose products reference an attribute."""
    result = await db.execute(
        select(Product.seller_id)
        .join(product_attributes, product_attributes.c.product_id == Product.id)
        .where(product_attributes.c.attribute_id == attribute_id)
        .distinct()
    )
    return frozenset(result.scalars().all())


class ProductService(ResourceService[Product]):
    model = Product
    policy = PRODUCTS
    filterable = ("is_visible", "category_id")

    def public_filter(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.where(Product.is_visible.is_(True))

    def is_published(self, record: Product) -> bool:
        return record.is_visible

    def media_urls(self, record: Product) -> list[str]:
        return list(record.images or [])

    async def _resolve_category(self, actor: Actor | None, category_id: uuid.UUID | None) -> None:
        if category_id is None:
            return
        category = await self.db.get(Category, category_id)
        if category is None:
            raise NotFound("Category not found")
        authorize(actor, CATEGORIES, Operation.READ, frozenset({category.seller_id}))

    async def _resolve_attributes(
        self, actor: Actor | None, attribute_ids: list[uuid.UUID]
    ) -> list[Attribute]:
        attributes: list[Attribute] = await self.get_many(Attribute, attribute_ids)
        for attribute in attributes:
            authorize(actor, ATTRIBUTES, Operation.READ, await attribute_owners(self.db, attribute.id))
        return attributes

    async def assign(
        self,
        record: Product,
        data: dict[str, Any],
        actor: Actor | None,
        cleanup: CompensatingActions,
    ) -> None:
        attribute_ids = data.pop("attribute_ids", None)
        images_to_keep = data.pop("images_to_keep", None)
        new_images = data.pop("images", None) or []

        if "category_id" in data:
            await self._resolve_category(actor, data["category_id"])

        if attribute_ids is not None:
            record.attributes = await self._resolve_attributes(actor, attribute_ids)

        current = list(record.images or [])
        if images_to_keep is not None:
            keep_set = set(images_to_keep)
            keep = [url for url in current if url in keep_set]
            self.queue_media_cleanup(cleanup, [url for url in current if url not in keep])
            current = keep
        record.images = current + [url for url in new_images if url not in current]

        await super().assign(record, data, actor, cleanup)

    async def read(self, actor: Actor | None, record_id: uuid.UUID) -> Product:
        await super().read(actor, record_id)
        await self.increment(record_id, "visits")
        return await self.get_record(record_id)

    async def increment(self, record_id: uuid.UUID, counter: str) -> Product:
        """Atomically add one to a storefront counter (``visits`` or ``redirects``)."""
        column = getattr(Product, counter)
        result = await self.db.execute(
            update(Product).where(Product.id == record_id).values({column: column + 1})
        )
        if result.rowcount == 0:
            raise NotFound("Product not found")
        await self.db.commit()
        return await self.get_record(record_id)
