"""Business (storefront) endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.core.deps import CurrentActor, CurrentUser, DBSession
from app.schemas.common import ApiResponse
from app.schemas.storefront import BusinessCreate, BusinessResponse, BusinessUpdate
from app.services.business_service import BusinessService
from app.services.role_service import self_or_admin_guard

router = APIRouter()


def get_business_service(db: DBSession) -> BusinessService:
    return BusinessService(db)


Businesses = Annotated[BusinessService, Depends(get_business_service)]


@router.get("", response_model=ApiResponse[list[BusinessResponse]])
async def list_businesses(
    service: Businesses,
    actor: CurrentActor,
) -> ApiResponse[list[BusinessResponse]]:
    businesses = await service.list_records(actor)
    return ApiResponse[list[BusinessResponse]](
        data=[BusinessResponse.model_validate(b) for b in businesses],
        count=len(businesses),
    )


@router.get("/seller/{seller_id}", response_model=ApiResponse[list[BusinessResponse]])
async def list_businesses_for_seller(
    seller_id: str,
    service: Businesses,
    user: CurrentUser,
) -> ApiResponse[list[BusinessResponse]]:
    """List one seller's businesses. Accepts ``me``."""
    target = self_or_admin_guard(user, seller_id)
    businesses = await service.list_for_seller(target)
    return ApiResponse[list[BusinessResponse]](
        data=[BusinessResponse.model_validate(b) for b in businesses],
        count=len(businesses),
    )


@router.get("/{business_id}", response_model=ApiResponse[BusinessResponse])
async def get_business(
    business_id: UUID,
    service: Businesses,
    actor: CurrentActor,
) -> ApiResponse[BusinessResponse]:
    business = await service.read(actor, business_id)
    return ApiResponse[BusinessResponse](data=BusinessResponse.model_validate(business))


@router.post(
    "",
    response_model=ApiResponse[BusinessResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_business(
    data: BusinessCreate,
    service: Businesses,
    actor: CurrentActor,
) -> ApiResponse[BusinessResponse]:
    business = await service.create(actor, data.model_dump())
    return ApiResponse[BusinessResponse](data=BusinessResponse.model_validate(business))


@router.put("/{business_id}", response_model=ApiResponse[BusinessResponse])
async def update_business(
    business_id: UUID,
    data: BusinessUpdate,
    service: Businesses,
    actor: CurrentActor,
) -> ApiResponse[BusinessResponse]:
    business = await service.update(actor, business_id, data.model_dump(exclude_unset=True))
    return ApiResponse[BusinessResponse](data=BusinessResponse.model_validate(business))


@router.delete("/{business_id}", response_model=ApiResponse[None])
async def delete_business(
    business_id: UUID,
    service: Businesses,
    actor: CurrentActor,
) -> ApiResponse[None]:
    await service.delete(actor, business_id)
    return ApiResponse[None](message="Business deleted")
