"""Site details model aggregating storefront presentation content."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.associations import (
    site_categories,
    site_hero_slides,
    site_products,
    site_stories,
)
from app.models.base import Base

if TYPE_CHECKING:
    from app.models.category import Category
    from app.models.hero_slide import HeroSlide
    from app.models.product import Product
    from app.models.story import Story


class Site(Base):
    """Published storefront content.

    Sites have no owner column; they belong to whichever seller owns a
    business that points at them.
    """

    __tablename__ = "site_details"

    site_name: Mapped[str] = mapped_column(String(255), nullable=False)
    site_tagline: Mapped[str | None] = mapped_column(String(500), nullable=True)
    site_url: Mapped[str] = mapped_column(String(1024), nullable=False)

    hero_slides: Mapped[list["HeroSlide"]] = relationship(
        "HeroSlide", secondary=site_hero_slides, lazy="selectin"
    )
    products: Mapped[list["Product"]] = relationship(
        "Product", secondary=site_products, lazy="selectin"
    )
    stories: Mapped[list["Story"]] = relationship(
        "Story", secondary=site_stories, lazy="selectin"
    )
    categories: Mapped[list["Category"]] = relationship(
        "Category", secondary=site_categories, lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Site {self.site_name}>"
