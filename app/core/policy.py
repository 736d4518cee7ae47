"""Role-based authorization policy shared by every resource handler.

A single decision procedure covers all resource types. Differences between
resources are expressed as ``ResourcePolicy`` capability flags rather than
per-handler access checks:

- ``ownership``: whether records carry an owning seller, either directly
  (a ``seller_id`` column) or derived through the records that reference them.
- ``public_read``: whether visitors and anonymous callers may list and read.
- ``unowned_is_shared``: for derived ownership, whether a record that nothing
  owns yet is shared with every seller.

Denials are raised as domain errors. Allowed calls return a ``Decision`` that
tells the handler how to scope listings and which owner to stamp on creates.
"""

import enum
import uuid
from collections.abc import Set
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.core.exceptions import (
    Forbidden,
    MissingOwner,
    OwnershipViolation,
    Unauthenticated,
)
from app.models.user import UserRole

if TYPE_CHECKING:
    from app.models.user import User


class Operation(str, enum.Enum):
    LIST = "list"
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def is_read(self) -> bool:
        return self in (Operation.LIST, Operation.READ)


class Ownership(str, enum.Enum):
    NONE = "none"
    DIRECT = "direct"
    DERIVED = "derived"


@dataclass(frozen=True)
class Actor:
    """The identity making a request. Anonymous callers are ``None``."""

    user_id: uuid.UUID
    role: UserRole
    seller_id: uuid.UUID | None = None

    @classmethod
    def from_user(cls, user: "User | None") -> "Actor | None":
        if user is None:
            return None
        return cls(user_id=user.id, role=user.role, seller_id=user.seller_id)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class ResourcePolicy:
    name: str
    ownership: Ownership = Ownership.NONE
    public_read: bool = False
    unowned_is_shared: bool = False

    @property
    def is_owned(self) -> bool:
        return self.ownership != Ownership.NONE


@dataclass(frozen=True)
class Decision:
    """Outcome of an allowed request.

    Attributes:
        scope_seller_id: Restrict listings to this seller (``None`` = no scope).
        owner_seller_id: Owner to stamp on a newly created record.
    """

    scope_seller_id: uuid.UUID | None = None
    owner_seller_id: uuid.UUID | None = None


ALLOW = Decision()


# === Resource capability table ===

PRODUCTS = ResourcePolicy("product", Ownership.DIRECT, public_read=True)
CATEGORIES = ResourcePolicy("category", Ownership.DIRECT, public_read=True)
BUSINESSES = ResourcePolicy("business", Ownership.DIRECT)
SELLERS = ResourcePolicy("seller", Ownership.DIRECT)
ANALYTICS = ResourcePolicy("analytics", Ownership.DERIVED)
SITES = ResourcePolicy("site", Ownership.DERIVED)
ATTRIBUTES = ResourcePolicy(
    "attribute", Ownership.DERIVED, public_read=True, unowned_is_shared=True
)
HERO_SLIDES = ResourcePolicy("hero slide", public_read=True)
STORIES = ResourcePolicy("story", public_read=True)
STORY_CARDS = ResourcePolicy("story card")


def authorize(
    actor: Actor | None,
    resource: ResourcePolicy,
    operation: Operation,
    owners: Set[uuid.UUID] = frozenset(),
    requested_owner: uuid.UUID | None = None,
) -> Decision:
    """Decide whether ``actor`` may perform ``operation`` on ``resource``.

    Args:
        actor: The caller, or ``None`` when anonymous.
        resource: Capability flags of the resource type.
        operation: The operation being attempted.
        owners: Seller ids owning the target record. Direct ownership gives a
            single id; derived ownership may give none or several.
        requested_owner: Owner supplied by the caller on ``create``.

    Raises:
        Unauthenticated: Anonymous caller on a non-public operation.
        Forbidden: Visitor on a non-public operation, or seller without a
            seller profile on a write.
        OwnershipViolation: Seller touching another seller's record.
        MissingOwner: Admin creating a directly owned record without an owner.
    """
    if actor is None:
        if operation.is_read and resource.public_read:
            return ALLOW
        raise Unauthenticated("Not authorized, no token")

    if actor.is_admin:
        return _authorize_admin(resource, operation, requested_owner)

    if actor.role == UserRole.SELLER:
        return _authorize_seller(actor, resource, operation, owners, requested_owner)

    if operation.is_read and resource.public_read:
        return ALLOW
    raise Forbidden("Access denied. Seller privileges required.")


def _authorize_admin(
    resource: ResourcePolicy,
    operation: Operation,
    requested_owner: uuid.UUID | None,
) -> Decision:
    if operation == Operation.CREATE and resource.ownership == Ownership.DIRECT:
        if requested_owner is None:
            raise MissingOwner(f"Admin must provide seller_id when creating a {resource.name}")
        return Decision(owner_seller_id=requested_owner)
    return ALLOW


def _authorize_seller(
    actor: Actor,
    resource: ResourcePolicy,
    operation: Operation,
    owners: Set[uuid.UUID],
    requested_owner: uuid.UUID | None,
) -> Decision:
    if not resource.is_owned:
        if operation.is_read:
            return ALLOW
        if actor.seller_id is None:
            raise Forbidden("Access denied. Seller privileges required.")
        return ALLOW

    seller_id = actor.seller_id
    if seller_id is None:
        raise Forbidden(f"Access denied. You must have a seller profile to manage a {resource.name}.")

    if operation == Operation.LIST:
        return Decision(scope_seller_id=seller_id)

    if operation == Operation.CREATE:
        if requested_owner is not None and requested_owner != seller_id:
            raise OwnershipViolation(
                f"Access denied. You can only create a {resource.name} for yourself."
            )
        # A new derived record may only hang off records the seller owns
        if not owners <= {seller_id}:
            raise OwnershipViolation()
        return Decision(owner_seller_id=seller_id)

    if set(owners) == {seller_id}:
        return ALLOW
    if not owners and resource.unowned_is_shared:
        return ALLOW
    raise OwnershipViolation(f"Access denied. You can only manage your own {resource.name}.")
