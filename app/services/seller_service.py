"""Seller profile reads, scoped like any other owned resource."""

import uuid
from typing import Any

from sqlalchemy import Select

from app.core.policy import SELLERS
from app.models.seller import Seller
from app.services.resource_service import ResourceService


class SellerService(ResourceService[Seller]):
    """Read access to seller profiles.

    A seller profile is owned by itself: its own id is the owner id. Creating
    and removing profiles changes the owner's role and goes through
    ``RoleTransitionService`` instead.
    """

    model = Seller
    policy = SELLERS

    async def owners_of(self, record: Seller) -> frozenset[uuid.UUID]:
        return frozenset({record.id})

    def scope(self, stmt: Select[Any], seller_id: uuid.UUID) -> Select[Any]:
        return stmt.where(Seller.id == seller_id)
