"""Story endpoints, including story card attachment."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.core.deps import CurrentActor, DBSession, OptionalActor
from app.schemas.common import ApiResponse
from app.schemas.content import StoryCardAttach, StoryCreate, StoryResponse, StoryUpdate
from app.services.content_service import StoryService

router = APIRouter()


def get_story_service(db: DBSession) -> StoryService:
    return StoryService(db)


Stories = Annotated[StoryService, Depends(get_story_service)]


@router.get("", response_model=ApiResponse[list[StoryResponse]])
async def list_stories(
    service: Stories,
    actor: OptionalActor,
    is_visible: bool | None = Query(default=None),
) -> ApiResponse[list[StoryResponse]]:
    """List stories. Visitors and anonymous callers only get visible ones."""
    stories = await service.list_records(actor, is_visible=is_visible)
    return ApiResponse[list[StoryResponse]](
        data=[StoryResponse.model_validate(s) for s in stories],
        count=len(stories),
    )


@router.get("/{story_id}", response_model=ApiResponse[StoryResponse])
async def get_story(story_id: UUID, service: Stories, actor: OptionalActor) -> ApiResponse[StoryResponse]:
    story = await service.read(actor, story_id)
    return ApiResponse[StoryResponse](data=StoryResponse.model_validate(story))


@router.post(
    "",
    response_model=ApiResponse[StoryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_story(
    data: StoryCreate,
    service: Stories,
    actor: CurrentActor,
) -> ApiResponse[StoryResponse]:
    story = await service.create(actor, data.model_dump())
    return ApiResponse[StoryResponse](data=StoryResponse.model_validate(story))


@router.put("/{story_id}", response_model=ApiResponse[StoryResponse])
async def update_story(
    story_id: UUID,
    data: StoryUpdate,
    service: Stories,
    actor: CurrentActor,
) -> ApiResponse[StoryResponse]:
    story = await service.update(actor, story_id, data.model_dump(exclude_unset=True))
    return ApiResponse[StoryResponse](data=StoryResponse.model_validate(story))


@router.delete("/{story_id}", response_model=ApiResponse[None])
async def delete_story(story_id: UUID, service: Stories, actor: CurrentActor) -> ApiResponse[None]:
    await service.delete(actor, story_id)
    return ApiResponse[None](message="Story deleted")


@router.put("/{story_id}/story-cards", response_model=ApiResponse[StoryResponse])
async def attach_story_card(
    story_id: UUID,
    data: StoryCardAttach,
    service: Stories,
    actor: CurrentActor,
) -> ApiResponse[StoryResponse]:
    story = await service.add_story_card(actor, story_id, data.story_card_id)
    return ApiResponse[StoryResponse](data=StoryResponse.model_validate(story))


@router.delete("/{story_id}/story-cards/{card_id}", response_model=ApiResponse[StoryResponse])
async def detach_story_card(
    story_id: UUID,
    card_id: UUID,
    service: Stories,
    actor: CurrentActor,
) -> ApiResponse[StoryResponse]:
    story = await service.remove_story_card(actor, story_id, card_id)
    return ApiResponse[StoryResponse](data=StoryResponse.model_validate(story))
