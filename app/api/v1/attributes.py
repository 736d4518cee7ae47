"""Product attribute endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.core.deps import CurrentActor, DBSession, OptionalActor
from app.schemas.common import ApiResponse
from app.schemas.product import AttributeCreate, AttributeResponse, AttributeUpdate
from app.services.category_service import AttributeService

router = APIRouter()


def get_attribute_service(db: DBSession) -> AttributeService:
    return AttributeService(db)


Attributes = Annotated[AttributeService, Depends(get_attribute_service)]


@router.get("", response_model=ApiResponse[list[AttributeResponse]])
async def list_attributes(
    service: Attributes,
    actor: OptionalActor,
) -> ApiResponse[list[AttributeResponse]]:
    attributes = await service.list_records(actor)
    return ApiResponse[list[AttributeResponse]](
        data=[AttributeResponse.model_validate(a) for a in attributes],
        count=len(attributes),
    )


@router.get("/{attribute_id}", response_model=ApiResponse[AttributeResponse])
async def get_attribute(
    attribute_id: UUID,
    service: Attributes,
    actor: OptionalActor,
) -> ApiResponse[AttributeResponse]:
    attribute = await service.read(actor, attribute_id)
    return ApiResponse[AttributeResponse](data=AttributeResponse.model_validate(attribute))


@router.post(
    "",
    response_model=ApiResponse[AttributeResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_attribute(
    data: AttributeCreate,
    service: Attributes,
    actor: CurrentActor,
) -> ApiResponse[AttributeResponse]:
    attribute = await service.create(actor, data.model_dump())
    return ApiResponse[AttributeResponse](data=AttributeResponse.model_validate(attribute))


@router.put("/{attribute_id}", response_model=ApiResponse[AttributeResponse])
async def update_attribute(
    attribute_id: UUID,
    data: AttributeUpdate,
    service: Attributes,
    actor: CurrentActor,
) -> ApiResponse[AttributeResponse]:
    attribute = await service.update(actor, attribute_id, data.model_dump(exclude_unset=True))
    return ApiResponse[AttributeResponse](data=AttributeResponse.model_validate(attribute))


@router.delete("/{attribute_id}", response_model=ApiResponse[None])
async def delete_attribute(
    attribute_id: UUID,
    service: Attributes,
    actor: CurrentActor,
) -> ApiResponse[None]:
    await service.delete(actor, attribute_id)
    return ApiResponse[None](message="Attribute deleted")
