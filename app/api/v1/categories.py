"""Category endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.core.deps import CurrentActor, DBSession, OptionalActor
from app.schemas.common import ApiResponse
from app.schemas.product import CategoryCreate, CategoryResponse, CategoryUpdate
from app.services.category_service import CategoryService

router = APIRouter()


def get_category_service(db: DBSession) -> CategoryService:
    return CategoryService(db)


Categories = Annotated[CategoryService, Depends(get_category_service)]


@router.get("", response_model=ApiResponse[list[CategoryResponse]])
async def list_categories(
    service: Categories,
    actor: OptionalActor,
) -> ApiResponse[list[CategoryResponse]]:
    """List categories. Sellers only see their own."""
    categories = await service.list_records(actor)
    return ApiResponse[list[CategoryResponse]](
        data=[CategoryResponse.model_validate(c) for c in categories],
        count=len(categories),
    )


@router.get("/{category_id}", response_model=ApiResponse[CategoryResponse])
async def get_category(
    category_id: UUID,
    service: Categories,
    actor: OptionalActor,
) -> ApiResponse[CategoryResponse]:
    category = await service.read(actor, category_id)
    return ApiResponse[CategoryResponse](data=CategoryResponse.model_validate(category))


@router.post(
    "",
    response_model=ApiResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    data: CategoryCreate,
    service: Categories,
    actor: CurrentActor,
) -> ApiResponse[CategoryResponse]:
    category = await service.create(actor, data.model_dump())
    return ApiResponse[CategoryResponse](data=CategoryResponse.model_validate(category))


@router.put("/{category_id}", response_model=ApiResponse[CategoryResponse])
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    service: Categories,
    actor: CurrentActor,
) -> ApiResponse[CategoryResponse]:
    category = await service.update(actor, category_id, data.model_dump(exclude_unset=True))
    return ApiResponse[CategoryResponse](data=CategoryResponse.model_validate(category))


@router.delete("/{category_id}", response_model=ApiResponse[None])
async def delete_category(
    category_id: UUID,
    service: Categories,
    actor: CurrentActor,
) -> ApiResponse[None]:
    """Delete a category. Its products stay, without a category."""
    await service.delete(actor, category_id)
    return ApiResponse[None](message="Category deleted")
