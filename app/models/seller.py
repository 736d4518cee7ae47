"""Seller profile model."""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base

if TYPE_CHECKING:
    from app.models.user import User


class Seller(Base):
    """Business-owner profile.

    Linked 1:1 to the owning user through ``User.seller_id``. Deleting a seller
    cascades to its businesses, products and categories at the database level.
    """

    __tablename__ = "sellers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False)
    whatsapp_number: Mapped[str] = mapped_column(String(32), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)

    user: Mapped["User | None"] = relationship(
        "User",
        back_populates="seller",
        uselist=False,
        lazy="noload",
    )

    def __repr__(self) -> str:
        return f"<Seller {self.name}>"
