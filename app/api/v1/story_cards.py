"""Story card endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.core.deps import CurrentActor, DBSession, Media
from app.schemas.common import ApiResponse
from app.schemas.content import StoryCardCreate, StoryCardResponse, StoryCardUpdate
from app.services.content_service import StoryCardService

router = APIRouter()


def get_story_card_service(db: DBSession, media: Media) -> StoryCardService:
    return StoryCardService(db, media)


StoryCards = Annotated[StoryCardService, Depends(get_story_card_service)]


@router.get("", response_model=ApiResponse[list[StoryCardResponse]])
async def list_story_cards(
    service: StoryCards,
    actor: CurrentActor,
) -> ApiResponse[list[StoryCardResponse]]:
    cards = await service.list_records(actor)
    return ApiResponse[list[StoryCardResponse]](
        data=[StoryCardResponse.model_validate(c) for c in cards],
        count=len(cards),
    )


@router.get("/{card_id}", response_model=ApiResponse[StoryCardResponse])
async def get_story_card(
    card_id: UUID,
    service: StoryCards,
    actor: CurrentActor,
) -> ApiResponse[StoryCardResponse]:
    card = await service.read(actor, card_id)
    return ApiResponse[StoryCardResponse](data=StoryCardResponse.model_validate(card))


@router.post(
    "",
    response_model=ApiResponse[StoryCardResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_story_card(
    data: StoryCardCreate,
    service: StoryCards,
    actor: CurrentActor,
) -> ApiResponse[StoryCardResponse]:
    card = await service.create(actor, data.model_dump())
    return ApiResponse[StoryCardResponse](data=StoryCardResponse.model_validate(card))


@router.put("/{card_id}", response_model=ApiResponse[StoryCardResponse])
async def update_story_card(
    card_id: UUID,
    data: StoryCardUpdate,
    service: StoryCards,
    actor: CurrentActor,
) -> ApiResponse[StoryCardResponse]:
    card = await service.update(actor, card_id, data.model_dump(exclude_unset=True))
    return ApiResponse[StoryCardResponse](data=StoryCardResponse.model_validate(card))


@router.delete("/{card_id}", response_model=ApiResponse[None])
async def delete_story_card(
    card_id: UUID,
    service: StoryCards,
    actor: CurrentActor,
) -> ApiResponse[None]:
    await service.delete(actor, card_id)
    return ApiResponse[None](message="Story card deleted")
