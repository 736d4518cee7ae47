"""Hero slide endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.core.deps import CurrentActor, DBSession, Media, OptionalActor
from app.schemas.common import ApiResponse
from app.schemas.content import HeroSlideCreate, HeroSlideResponse, HeroSlideUpdate
from app.services.content_service import HeroSlideService

router = APIRouter()


def get_hero_slide_service(db: DBSession, media: Media) -> HeroSlideService:
    return HeroSlideService(db, media)


HeroSlides = Annotated[HeroSlideService, Depends(get_hero_slide_service)]


@router.get("", response_model=ApiResponse[list[HeroSlideResponse]])
async def list_hero_slides(
    service: HeroSlides,
    actor: OptionalActor,
) -> ApiResponse[list[HeroSlideResponse]]:
    slides = await service.list_records(actor)
    return ApiResponse[list[HeroSlideResponse]](
        data=[HeroSlideResponse.model_validate(s) for s in slides],
        count=len(slides),
    )


@router.get("/{slide_id}", response_model=ApiResponse[HeroSlideResponse])
async def get_hero_slide(
    slide_id: UUID,
    service: HeroSlides,
    actor: OptionalActor,
) -> ApiResponse[HeroSlideResponse]:
    slide = await service.read(actor, slide_id)
    return ApiResponse[HeroSlideResponse](data=HeroSlideResponse.model_validate(slide))


@router.post(
    "",
    response_model=ApiResponse[HeroSlideResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_hero_slide(
    data: HeroSlideCreate,
    service: HeroSlides,
    actor: CurrentActor,
) -> ApiResponse[HeroSlideResponse]:
    slide = await service.create(actor, data.model_dump())
    return ApiResponse[HeroSlideResponse](data=HeroSlideResponse.model_validate(slide))


@router.put("/{slide_id}", response_model=ApiResponse[HeroSlideResponse])
async def update_hero_slide(
    slide_id: UUID,
    data: HeroSlideUpdate,
    service: HeroSlides,
    actor: CurrentActor,
) -> ApiResponse[HeroSlideResponse]:
    """Update a slide. A replaced image is removed from the media host."""
    slide = await service.update(actor, slide_id, data.model_dump(exclude_unset=True))
    return ApiResponse[HeroSlideResponse](data=HeroSlideResponse.model_validate(slide))


@router.delete("/{slide_id}", response_model=ApiResponse[None])
async def delete_hero_slide(
    slide_id: UUID,
    service: HeroSlides,
    actor: CurrentActor,
) -> ApiResponse[None]:
    await service.delete(actor, slide_id)
    return ApiResponse[None](message="Hero slide deleted")
