"""Business model: a seller's storefront instance."""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class Business(Base):
    """Storefront owned by exactly one seller, optionally published as a site."""

    __tablename__ = "businesses"

    business_name: Mapped[str] = mapped_column(String(255), nullable=False)
    business_tagline: Mapped[str | None] = mapped_column(String(500), nullable=True)
    business_email: Mapped[str] = mapped_column(String(255), nullable=False)
    template_id: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    seller_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("sellers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    site_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("site_details.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Business {self.business_name} ({self.seller_id})>"
