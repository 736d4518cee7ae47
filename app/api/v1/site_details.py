"""Site detail endpoints.

A site is owned through the business that links to it. Creating a site with
``business_id`` links it to that business in the same transaction.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.core.deps import CurrentActor, DBSession
from app.schemas.common import ApiResponse
from app.schemas.storefront import SiteCreate, SiteHeroSlideAttach, SiteResponse, SiteUpdate
from app.services.site_service import SiteService

router = APIRouter()


def get_site_service(db: DBSession) -> SiteService:
    return SiteService(db)


Sites = Annotated[SiteService, Depends(get_site_service)]


@router.get("", response_model=ApiResponse[list[SiteResponse]])
async def list_sites(service: Sites, actor: CurrentActor) -> ApiResponse[list[SiteResponse]]:
    sites = await service.list_records(actor)
    return ApiResponse[list[SiteResponse]](
        data=[SiteResponse.model_validate(s) for s in sites],
        count=len(sites),
    )


@router.get("/{site_id}", response_model=ApiResponse[SiteResponse])
async def get_site(site_id: UUID, service: Sites, actor: CurrentActor) -> ApiResponse[SiteResponse]:
    site = await service.read(actor, site_id)
    return ApiResponse[SiteResponse](data=SiteResponse.model_validate(site))


@router.post(
    "",
    response_model=ApiResponse[SiteResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_site(
    data: SiteCreate,
    service: Sites,
    actor: CurrentActor,
) -> ApiResponse[SiteResponse]:
    site = await service.create(actor, data.model_dump())
    return ApiResponse[SiteResponse](data=SiteResponse.model_validate(site))


@router.put("/{site_id}", response_model=ApiResponse[SiteResponse])
async def update_site(
    site_id: UUID,
    data: SiteUpdate,
    service: Sites,
    actor: CurrentActor,
) -> ApiResponse[SiteResponse]:
    site = await service.update(actor, site_id, data.model_dump(exclude_unset=True))
    return ApiResponse[SiteResponse](data=SiteResponse.model_validate(site))


@router.delete("/{site_id}", response_model=ApiResponse[None])
async def delete_site(site_id: UUID, service: Sites, actor: CurrentActor) -> ApiResponse[None]:
    await service.delete(actor, site_id)
    return ApiResponse[None](message="Site deleted")


@router.put("/{site_id}/hero-slides", response_model=ApiResponse[SiteResponse])
async def attach_hero_slide(
    site_id: UUID,
    data: SiteHeroSlideAttach,
    service: Sites,
    actor: CurrentActor,
) -> ApiResponse[SiteResponse]:
    """Attach a hero slide. Attaching twice is a no-op."""
    site = await service.add_hero_slide(actor, site_id, data.hero_slide_id)
    return ApiResponse[SiteResponse](data=SiteResponse.model_validate(site))


@router.delete("/{site_id}/hero-slides/{slide_id}", response_model=ApiResponse[SiteResponse])
async def detach_hero_slide(
    site_id: UUID,
    slide_id: UUID,
    service: Sites,
    actor: CurrentActor,
) -> ApiResponse[SiteResponse]:
    site = await service.remove_hero_slide(actor, site_id, slide_id)
    return ApiResponse[SiteResponse](data=SiteResponse.model_validate(site))
