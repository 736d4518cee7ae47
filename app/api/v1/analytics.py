"""Business analytics endpoints.

View and click counters are public so storefront pages can bump them.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.core.deps import CurrentActor, DBSession
from app.schemas.common import ApiResponse
from app.schemas.storefront import AnalyticsCreate, AnalyticsResponse, AnalyticsUpdate
from app.services.analytics_service import AnalyticsService

router = APIRouter()


def get_analytics_service(db: DBSession) -> AnalyticsService:
    return AnalyticsService(db)


AnalyticsRecords = Annotated[AnalyticsService, Depends(get_analytics_service)]


@router.get("", response_model=ApiResponse[list[AnalyticsResponse]])
async def list_analytics(
    service: AnalyticsRecords,
    actor: CurrentActor,
    business_id: UUID | None = Query(default=None),
) -> ApiResponse[list[AnalyticsResponse]]:
    records = await service.list_records(actor, business_id=business_id)
    return ApiResponse[list[AnalyticsResponse]](
        data=[AnalyticsResponse.model_validate(r) for r in records],
        count=len(records),
    )


@router.get("/business/{business_id}", response_model=ApiResponse[list[AnalyticsResponse]])
async def list_analytics_for_business(
    business_id: UUID,
    service: AnalyticsRecords,
    actor: CurrentActor,
) -> ApiResponse[list[AnalyticsResponse]]:
    """Newest first."""
    records = await service.list_for_business(actor, business_id)
    return ApiResponse[list[AnalyticsResponse]](
        data=[AnalyticsResponse.model_validate(r) for r in records],
        count=len(records),
    )


@router.get("/{record_id}", response_model=ApiResponse[AnalyticsResponse])
async def get_analytics(
    record_id: UUID,
    service: AnalyticsRecords,
    actor: CurrentActor,
) -> ApiResponse[AnalyticsResponse]:
    record = await service.read(actor, record_id)
    return ApiResponse[AnalyticsResponse](data=AnalyticsResponse.model_validate(record))


@router.post(
    "",
    response_model=ApiResponse[AnalyticsResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_analytics(
    data: AnalyticsCreate,
    service: AnalyticsRecords,
    actor: CurrentActor,
) -> ApiResponse[AnalyticsResponse]:
    record = await service.create(actor, data.model_dump())
    return ApiResponse[AnalyticsResponse](data=AnalyticsResponse.model_validate(record))


@router.put("/{record_id}", response_model=ApiResponse[AnalyticsResponse])
async def update_analytics(
    record_id: UUID,
    data: AnalyticsUpdate,
    service: AnalyticsRecords,
    actor: CurrentActor,
) -> ApiResponse[AnalyticsResponse]:
    record = await service.update(actor, record_id, data.model_dump(exclude_unset=True))
    return ApiResponse[AnalyticsResponse](data=AnalyticsResponse.model_validate(record))


@router.delete("/{record_id}", response_model=ApiResponse[None])
async def delete_analytics(
    record_id: UUID,
    service: AnalyticsRecords,
    actor: CurrentActor,
) -> ApiResponse[None]:
    await service.delete(actor, record_id)
    return ApiResponse[None](message="Analytics record deleted")


@router.put("/{record_id}/views", response_model=ApiResponse[AnalyticsResponse])
async def increment_views(record_id: UUID, service: AnalyticsRecords) -> ApiResponse[AnalyticsResponse]:
    record = await service.increment(record_id, "views")
    return ApiResponse[AnalyticsResponse](data=AnalyticsResponse.model_validate(record))


@router.put("/{record_id}/clicks", response_model=ApiResponse[AnalyticsResponse])
async def increment_clicks(record_id: UUID, service: AnalyticsRecords) -> ApiResponse[AnalyticsResponse]:
    record = await service.increment(record_id, "clicks")
    return ApiResponse[AnalyticsResponse](data=AnalyticsResponse.model_validate(record))
