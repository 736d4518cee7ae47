"""Hero slide model for storefront banners."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class HeroSlide(Base):
    __tablename__ = "hero_slides"

    tagline: Mapped[str] = mapped_column(String(500), nullable=False)
    image: Mapped[str] = mapped_column(String(1024), nullable=False)

    def __repr__(self) -> str:
        return f"<HeroSlide {self.tagline}>"
