"""Generic CRUD handler that routes every operation through the policy."""

import logging
import uuid
from collections.abc import Iterable, Sequence
from typing import Any, ClassVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import MissingOwner, NotFound
from app.core.policy import Actor, Decision, Operation, Ownership, ResourcePolicy, authorize
from app.models.base import Base
from app.models.seller import Seller
from app.models.user import UserRole
from app.services.media_service import CompensatingActions, MediaService

logger = logging.getLogger(__name__)


def is_public_caller(actor: Actor | None) -> bool:
    """Visitors and anonymous callers only ever see published records."""
    return actor is None or actor.role == UserRole.VISITOR


class ResourceService[ModelT: Base]:
    """CRUD for one resource type.

    Subclasses set ``model`` and ``policy`` and override the hooks that differ
    per resource: how owners are derived, how listings are scoped, which
    records are public, and which media URLs a record holds. Media cleanup is
    queued while the mutation runs and executed only after it committed.
    """

    model: ClassVar[type[Base]]
    policy: ClassVar[ResourcePolicy]
    filterable: ClassVar[tuple[str, ...]] = ()

    def __init__(self, db: AsyncSession, media: MediaService | None = None) -> None:
        self.db = db
        self.media = media

    # === Hooks ===

    async def owners_of(self, record: ModelT) -> frozenset[uuid.UUID]:
        """Seller ids owning ``record``."""
        if self.policy.ownership == Ownership.DIRECT:
            return frozenset({record.seller_id})  # type: ignore[attr-defined]
        return frozenset()

    async def creation_owners(self, data: dict[str, Any]) -> frozenset[uuid.UUID]:
        """Owners of the records a new derived record will hang off."""
        return frozenset()

    def scope(self, stmt: Select[Any], seller_id: uuid.UUID) -> Select[Any]:
        return stmt.where(self.model.seller_id == seller_id)  # type: ignore[attr-defined]

    def public_filter(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    def is_published(self, record: ModelT) -> bool:
        return True

    def media_urls(self, record: ModelT) -> list[str]:
        return []

    async def assign(
        self,
        record: ModelT,
        data: dict[str, Any],
        actor: Actor | None,
        cleanup: CompensatingActions,
    ) -> None:
        """Copy validated input onto the record."""
        for field, value in data.items():
            setattr(record, field, value)

    # === Queries ===

    def base_query(self) -> Select[Any]:
        return select(self.model)

    async def get_record(self, record_id: uuid.UUID) -> ModelT:
        result = await self.db.execute(
            self.base_query()
            .where(self.model.id == record_id)
            .execution_options(populate_existing=True)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise NotFound(f"{self.policy.name.capitalize()} not found")
        return record

    async def get_many(self, model: type[Base], ids: Sequence[uuid.UUID]) -> list[Any]:
        """Load referenced records, failing if any id is unknown."""
        unique_ids = list(dict.fromkeys(ids))
        if not unique_ids:
            return []
        result = await self.db.execute(select(model).where(model.id.in_(unique_ids)))
        found = list(result.scalars().all())
        if len(found) != len(unique_ids):
            raise NotFound(f"One or more referenced {model.__tablename__} were not found")
        return found

    async def ensure_seller_exists(self, seller_id: uuid.UUID) -> None:
        if await self.db.get(Seller, seller_id) is None:
            raise NotFound("Seller not found")

    # === Operations ===

    async def list_records(self, actor: Actor | None, **filters: Any) -> list[ModelT]:
        decision = authorize(actor, self.policy, Operation.LIST)

        stmt = self.base_query()
        if decision.scope_seller_id is not None:
            stmt = self.scope(stmt, decision.scope_seller_id)
        if is_public_caller(actor):
            stmt = self.public_filter(stmt)
        for field in self.filterable:
            value = filters.get(field)
            if value is not None:
                stmt = stmt.where(getattr(self.model, field) == value)

        result = await self.db.execute(stmt.order_by(self.model.created_at.desc()))
        return list(result.scalars().all())

    async def read(self, actor: Actor | None, record_id: uuid.UUID) -> ModelT:
        record = await self.get_record(record_id)
        authorize(actor, self.policy, Operation.READ, await self.owners_of(record))
        if is_public_caller(actor) and not self.is_published(record):
            raise NotFound(f"{self.policy.name.capitalize()} not found")
        return record

    async def create(self, actor: Actor | None, data: dict[str, Any]) -> ModelT:
        data = dict(data)
        requested_owner = data.pop("seller_id", None)
        decision: Decision = authorize(
            actor,
            self.policy,
            Operation.CREATE,
            owners=await self.creation_owners(data),
            requested_owner=requested_owner,
        )

        record = self.model()
        if self.policy.ownership == Ownership.DIRECT:
            owner = decision.owner_seller_id
            if owner is None:
                raise MissingOwner(f"A {self.policy.name} needs an owning seller")
            await self.ensure_seller_exists(owner)
            record.seller_id = owner  # type: ignore[attr-defined]

        cleanup = CompensatingActions()
        await self.assign(record, dict(data), actor, cleanup)  # type: ignore[arg-type]
        self.db.add(record)
        await self.db.flush()
        await self.after_create(record, data, actor)  # type: ignore[arg-type]
        await self.db.commit()
        await cleanup.run()

        logger.info("%s created: id=%s", self.policy.name.capitalize(), record.id)
        return await self.get_record(record.id)

    async def after_create(self, record: ModelT, data: dict[str, Any], actor: Actor | None) -> None:
        """Extra writes in the creating transaction, once the record has an id."""

    async def update(
        self, actor: Actor | None, record_id: uuid.UUID, data: dict[str, Any]
    ) -> ModelT:
        record = await self.get_record(record_id)
        authorize(actor, self.policy, Operation.UPDATE, await self.owners_of(record))

        cleanup = CompensatingActions()
        await self.assign(record, dict(data), actor, cleanup)
        await self.db.commit()
        await cleanup.run()

        return await self.get_record(record_id)

    async def delete(self, actor: Actor | None, record_id: uuid.UUID) -> None:
        record = await self.get_record(record_id)
        authorize(actor, self.policy, Operation.DELETE, await self.owners_of(record))

        cleanup = CompensatingActions()
        self.queue_media_cleanup(cleanup, self.media_urls(record))

        await self.db.delete(record)
        await self.db.commit()
        await cleanup.run()

        logger.info("%s deleted: id=%s", self.policy.name.capitalize(), record_id)

    def queue_media_cleanup(self, cleanup: CompensatingActions, urls: Iterable[str | None]) -> None:
        if self.media is None:
            return
        cleanup.delete_media(self.media, urls)
