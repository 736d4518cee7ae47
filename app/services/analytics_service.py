"""Per-business analytics counters."""

import uuid
from typing import Any

from sqlalchemy import Select, select, update

from app.core.exceptions import NotFound
from app.core.policy import ANALYTICS, BUSINESSES, PRODUCTS, Actor, Operation, authorize
from app.models.analytics import Analytics
from app.models.business import Business
from app.models.product import Product
from app.services.media_service import CompensatingActions
from app.services.resource_service import ResourceService

COUNTERS = ("views", "clicks")


class AnalyticsService(ResourceService[Analytics]):
    """Analytics records belong to the seller that owns their business.

    Counter increments are public storefront events and are applied as single
    ``UPDATE ... SET n = n + 1`` statements.
    """

    model = Analytics
    policy = ANALYTICS
    filterable = ("business_id",)

    async def _get_business(self, business_id: uuid.UUID) -> Business:
        business = await self.db.get(Business, business_id)
        if business is None:
            raise NotFound("Business not found")
        return business

    async def owners_of(self, record: Analytics) -> frozenset[uuid.UUID]:
        business = await self.db.get(Business, record.business_id)
        return frozenset({business.seller_id}) if business else frozenset()

    async def creation_owners(self, data: dict[str, Any]) -> frozenset[uuid.UUID]:
        business = await self._get_business(data["business_id"])
        return frozenset({business.seller_id})

    def scope(self, stmt: Select[Any], seller_id: uuid.UUID) -> Select[Any]:
        owned_businesses = select(Business.id).where(Business.seller_id == seller_id)
        return stmt.where(Analytics.business_id.in_(owned_businesses))

    async def assign(
        self,
        record: Analytics,
        data: dict[str, Any],
        actor: Actor | None,
        cleanup: CompensatingActions,
    ) -> None:
        business_id = data.get("business_id")
        if business_id is not None and business_id != record.business_id:
            business = await self._get_business(business_id)
            if record.business_id is not None:
                authorize(actor, BUSINESSES, Operation.UPDATE, frozenset({business.seller_id}))

        product_ids = data.pop("product_ids", None)
        if product_ids is not None:
            products: list[Product] = await self.get_many(Product, product_ids)
            for product in products:
                authorize(actor, PRODUCTS, Operation.READ, frozenset({product.seller_id}))
            record.products = products

        await super().assign(record, data, actor, cleanup)

    async def list_for_business(self, actor: Actor | None, business_id: uuid.UUID) -> list[Analytics]:
        business = await self._get_business(business_id)
        authorize(actor, BUSINESSES, Operation.READ, frozenset({business.seller_id}))

        result = await self.db.execute(
            select(Analytics)
            .where(Analytics.business_id == business_id)
            .order_by(Analytics.date.desc())
        )
        return list(result.scalars().all())

    async def increment(self, record_id: uuid.UUID, counter: str) -> Analytics:
        if counter not in COUNTERS:
            raise ValueError(f"Unknown counter: {counter}")
        column = getattr(Analytics, counter)
        result = await self.db.execute(
            update(Analytics).where(Analytics.id == record_id).values({column: column + 1})
        )
        if result.rowcount == 0:
            raise NotFound("Analytics record not found")
        await self.db.commit()
        return await self.get_record(record_id)
