"""Seller profile endpoints.

Creating a profile promotes the caller to seller; deleting it demotes the
owner back to visitor. ``me`` may be used in place of a seller id.
"""

from fastapi import APIRouter, status

from app.core.deps import CurrentActor, CurrentUser, DBSession, Media
from app.schemas.common import ApiResponse
from app.schemas.seller import SellerCreate, SellerResponse, SellerUpdate
from app.services.media_service import CompensatingActions
from app.services.role_service import RoleTransitionService, self_or_admin_guard
from app.services.seller_service import SellerService

router = APIRouter()


@router.get("", response_model=ApiResponse[list[SellerResponse]])
async def list_sellers(db: DBSession, actor: CurrentActor) -> ApiResponse[list[SellerResponse]]:
    """Admins see every profile; sellers only their own."""
    sellers = await SellerService(db).list_records(actor)
    return ApiResponse[list[SellerResponse]](
        data=[SellerResponse.model_validate(s) for s in sellers],
        count=len(sellers),
    )


@router.get("/{seller_id}", response_model=ApiResponse[SellerResponse])
async def get_seller(
    seller_id: str,
    user: CurrentUser,
    actor: CurrentActor,
    db: DBSession,
) -> ApiResponse[SellerResponse]:
    target = self_or_admin_guard(user, seller_id)
    seller = await SellerService(db).read(actor, target)
    return ApiResponse[SellerResponse](data=SellerResponse.model_validate(seller))


@router.post(
    "",
    response_model=ApiResponse[SellerResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create my seller profile",
)
async def create_seller(
    data: SellerCreate,
    user: CurrentUser,
    db: DBSession,
) -> ApiResponse[SellerResponse]:
    seller = await RoleTransitionService(db).promote_to_seller(user.id, data.model_dump())
    return ApiResponse[SellerResponse](
        data=SellerResponse.model_validate(seller),
        message="Seller profile created",
    )


@router.put("/{seller_id}", response_model=ApiResponse[SellerResponse])
async def update_seller(
    seller_id: str,
    data: SellerUpdate,
    user: CurrentUser,
    db: DBSession,
) -> ApiResponse[SellerResponse]:
    target = self_or_admin_guard(user, seller_id)
    seller = await RoleTransitionService(db).update_seller(target, data.model_dump(exclude_unset=True))
    return ApiResponse[SellerResponse](data=SellerResponse.model_validate(seller))


@router.delete("/{seller_id}", response_model=ApiResponse[None])
async def delete_seller(
    seller_id: str,
    user: CurrentUser,
    db: DBSession,
    media: Media,
) -> ApiResponse[None]:
    """Delete a seller profile with its catalog and demote its owner."""
    target = self_or_admin_guard(user, seller_id)
    media_urls = await RoleTransitionService(db).remove_seller(target)

    cleanup = CompensatingActions()
    cleanup.delete_media(media, media_urls)
    await cleanup.run()

    return ApiResponse[None](message="Seller profile deleted")
