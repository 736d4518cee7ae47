"""Category model."""

import uuid

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class Category(Base):
    """Product category owned by a seller. Names are unique platform-wide."""

    __tablename__ = "categories"

    category_name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    seller_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("sellers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Category {self.category_name}>"
