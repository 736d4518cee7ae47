"""Category and attribute handlers."""

import uuid
from typing import Any

from sqlalchemy import Select, select

from app.core.exceptions import Conflict
from app.core.policy import ATTRIBUTES, CATEGORIES, Actor
from app.models.associations import product_attributes
from app.models.attribute import Attribute
from app.models.category import Category
from app.models.product import Product
from app.services.media_service import CompensatingActions
from app.services.product_service import attribute_owners
from app.services.resource_service import ResourceService


class CategoryService(ResourceService[Category]):
    model = Category
    policy = CATEGORIES

    async def assign(
        self,
        record: Category,
        data: dict[str, Any],
        actor: Actor | None,
        cleanup: CompensatingActions,
    ) -> None:
        name = data.get("category_name")
        if name is not None and name != record.category_name:
            result = await self.db.execute(
                select(Category.id).where(Category.category_name == name)
            )
            if result.scalar_one_or_none() is not None:
                raise Conflict("A category with this name already exists")
        await super().assign(record, data, actor, cleanup)


class AttributeService(ResourceService[Attribute]):
    """Attributes are owned by the sellers whose products use them.

    An attribute no product references yet is shared by every seller.
    """

    model = Attribute
    policy = ATTRIBUTES

    async def owners_of(self, record: Attribute) -> frozenset[uuid.UUID]:
        return await attribute_owners(self.db, record.id)

    def scope(self, stmt: Select[Any], seller_id: uuid.UUID) -> Select[Any]:
        used_by_others = (
            select(product_attributes.c.attribute_id)
            .join(Product, Product.id == product_attributes.c.product_id)
            .where(Product.seller_id != seller_id)
        )
        return stmt.where(Attribute.id.not_in(used_by_others))
