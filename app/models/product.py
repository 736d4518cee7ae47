"""Product model for seller catalogs."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.associations import product_attributes
from app.models.base import Base

if TYPE_CHECKING:
    from app.models.attribute import Attribute
    from app.models.category import Category


class Product(Base):
    """Product owned by a seller.

    Products reference a category and any number of attributes. ``visits`` and
    ``redirects`` are storefront counters and only ever grow.
    """

    __tablename__ = "products"

    seller_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("sellers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Product data
    product_name: Mapped[str] = mapped_column(String(500), nullable=False)
    product_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    inventory: Mapped[str] = mapped_column(String(100), default="In Stock", nullable=False)

    # Hosted image URLs
    images: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    # Storefront counters
    visits: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    redirects: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    category: Mapped["Category | None"] = relationship("Category", lazy="selectin")
    attributes: Mapped[list["Attribute"]] = relationship(
        "Attribute",
        secondary=product_attributes,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Product {self.product_name} ({self.seller_id})>"
