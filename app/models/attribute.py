"""Attribute model (e.g. size, colour) shared by products."""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class Attribute(Base):
    """Product attribute with its selectable options.

    Attributes carry no owner column. Ownership is derived from the products
    that reference them.
    """

    __tablename__ = "attributes"

    attribute_name: Mapped[str] = mapped_column(String(255), nullable=False)
    options: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    def __repr__(self) -> str:
        return f"<Attribute {self.attribute_name}>"
