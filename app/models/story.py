"""Story and story card models."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.associations import story_story_cards
from app.models.base import Base


class StoryCard(Base):
    """A single card (image + caption) that can appear in stories."""

    __tablename__ = "story_cards"

    story_card_title: Mapped[str] = mapped_column(String(255), nullable=False)
    story_card_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    story_card_image: Mapped[str] = mapped_column(String(1024), nullable=False)

    def __repr__(self) -> str:
        return f"<StoryCard {self.story_card_title}>"


class Story(Base):
    """An ordered collection of story cards shown on a storefront."""

    __tablename__ = "stories"

    story_title: Mapped[str] = mapped_column(String(255), nullable=False)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    story_cards: Mapped[list[StoryCard]] = relationship(
        StoryCard,
        secondary=story_story_cards,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Story {self.story_title}>"
