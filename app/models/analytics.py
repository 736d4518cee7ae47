"""Per-business analytics counters."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.associations import analytics_products
from app.models.base import Base

if TYPE_CHECKING:
    from app.models.product import Product


class Analytics(Base):
    """View and click counters for a business. Counters never decrease."""

    __tablename__ = "analytics"

    business_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    clicks: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    products: Mapped[list["Product"]] = relationship(
        "Product", secondary=analytics_products, lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Analytics business={self.business_id} views={self.views} clicks={self.clicks}>"
