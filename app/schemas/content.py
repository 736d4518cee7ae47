"""Pydantic schemas for hero slides, stories and story cards."""

from uuid import UUID

from pydantic import Field

from app.schemas.common import BaseSchema, RecordSchema

# === Hero slides ===


class HeroSlideCreate(BaseSchema):
    tagline: str = Field(..., min_length=1, max_length=500)
    image: str = Field(..., min_length=1, max_length=1024, description="Hosted image URL")


class HeroSlideUpdate(BaseSchema):
    tagline: str | None = Field(default=None, min_length=1, max_length=500)
    image: str | None = Field(default=None, min_length=1, max_length=1024)


class HeroSlideResponse(RecordSchema):
    tagline: str
    image: str


# === Story cards ===


class StoryCardCreate(BaseSchema):
    story_card_title: str = Field(..., min_length=1, max_length=255)
    story_card_description: str | None = None
    story_card_image: str = Field(..., min_length=1, max_length=1024)


class StoryCardUpdate(BaseSchema):
    story_card_title: str | None = Field(default=None, min_length=1, max_length=255)
    story_card_description: str | None = None
    story_card_image: str | None = Field(default=None, min_length=1, max_length=1024)


class StoryCardResponse(RecordSchema):
    story_card_title: str
    story_card_description: str | None
    story_card_image: str


# === Stories ===


class StoryCreate(BaseSchema):
    story_title: str = Field(..., min_length=1, max_length=255)
    is_visible: bool = True
    story_card_ids: list[UUID] = Field(default_factory=list)


class StoryUpdate(BaseSchema):
    story_title: str | None = Field(default=None, min_length=1, max_length=255)
    is_visible: bool | None = None
    story_card_ids: list[UUID] | None = None


class StoryCardAttach(BaseSchema):
    story_card_id: UUID


class StoryResponse(RecordSchema):
    story_title: str
    is_visible: bool
    story_cards: list[StoryCardResponse] = []
