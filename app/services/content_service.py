"""Shared storefront content: hero slides, stories and story cards.

These resources have no owner. Any seller may manage them and admins may do
anything; only hero slides and visible stories are readable by the public.
"""

import uuid
from typing import Any

from sqlalchemy import Select

from app.core.exceptions import NotFound
from app.core.policy import HERO_SLIDES, STORIES, STORY_CARDS, Actor, Operation, authorize
from app.models.base import Base
from app.models.hero_slide import HeroSlide
from app.models.story import Story, StoryCard
from app.services.media_service import CompensatingActions
from app.services.resource_service import ResourceService


class _SingleImageService[ModelT: Base](ResourceService[ModelT]):
    """Content with one hosted image; the replaced image is deleted after commit."""

    image_field: str

    def media_urls(self, record: ModelT) -> list[str]:
        url = getattr(record, self.image_field)
        return [url] if url else []

    async def assign(
        self,
        record: ModelT,
        data: dict[str, Any],
        actor: Actor | None,
        cleanup: CompensatingActions,
    ) -> None:
        previous = getattr(record, self.image_field)
        new_image = data.get(self.image_field)
        if previous and new_image and new_image != previous:
            self.queue_media_cleanup(cleanup, [previous])
        await super().assign(record, data, actor, cleanup)


class HeroSlideService(_SingleImageService[HeroSlide]):
    model = HeroSlide
    policy = HERO_SLIDES
    image_field = "image"


class StoryCardService(_SingleImageService[StoryCard]):
    model = StoryCard
    policy = STORY_CARDS
    image_field = "story_card_image"


class StoryService(ResourceService[Story]):
    model = Story
    policy = STORIES
    filterable = ("is_visible",)

    def public_filter(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.where(Story.is_visible.is_(True))

    def is_published(self, record: Story) -> bool:
        return record.is_visible

    async def assign(
        self,
        record: Story,
        data: dict[str, Any],
        actor: Actor | None,
        cleanup: CompensatingActions,
    ) -> None:
        story_card_ids = data.pop("story_card_ids", None)
        if story_card_ids is not None:
            record.story_cards = await self.get_many(StoryCard, story_card_ids)
        await super().assign(record, data, actor, cleanup)

    async def add_story_card(
        self, actor: Actor | None, story_id: uuid.UUID, story_card_id: uuid.UUID
    ) -> Story:
        story = await self.get_record(story_id)
        authorize(actor, STORIES, Operation.UPDATE)

        card = await self.db.get(StoryCard, story_card_id)
        if card is None:
            raise NotFound("Story card not found")

        if all(existing.id != card.id for existing in story.story_cards):
            story.story_cards.append(card)
            await self.db.commit()
        return await self.get_record(story_id)

    async def remove_story_card(
        self, actor: Actor | None, story_id: uuid.UUID, story_card_id: uuid.UUID
    ) -> Story:
        story = await self.get_record(story_id)
        authorize(actor, STORIES, Operation.UPDATE)

        story.story_cards = [card for card in story.story_cards if card.id != story_card_id]
        await self.db.commit()
        return await self.get_record(story_id)
