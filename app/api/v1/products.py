"""Product catalog endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.core.deps import CurrentActor, DBSession, Media, OptionalActor
from app.schemas.common import ApiResponse
from app.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from app.services.product_service import ProductService

router = APIRouter()


def get_product_service(db: DBSession, media: Media) -> ProductService:
    return ProductService(db, media)


Products = Annotated[ProductService, Depends(get_product_service)]


@router.get(
    "",
    response_model=ApiResponse[list[ProductResponse]],
    summary="List products",
    description="Admins see every product, sellers their own, and visitors or "
    "anonymous callers only visible products.",
)
async def list_products(
    service: Products,
    actor: OptionalActor,
    is_visible: bool | None = Query(default=None),
    category_id: UUID | None = Query(default=None),
) -> ApiResponse[list[ProductResponse]]:
    products = await service.list_records(actor, is_visible=is_visible, category_id=category_id)
    return ApiResponse[list[ProductResponse]](
        data=[ProductResponse.model_validate(p) for p in products],
        count=len(products),
    )


@router.get("/{product_id}", response_model=ApiResponse[ProductResponse])
async def get_product(
    product_id: UUID,
    service: Products,
    actor: OptionalActor,
) -> ApiResponse[ProductResponse]:
    """Get a product. Each successful read counts as a visit."""
    product = await service.read(actor, product_id)
    return ApiResponse[ProductResponse](data=ProductResponse.model_validate(product))


@router.post(
    "",
    response_model=ApiResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    data: ProductCreate,
    service: Products,
    actor: CurrentActor,
) -> ApiResponse[ProductResponse]:
    product = await service.create(actor, data.model_dump())
    return ApiResponse[ProductResponse](data=ProductResponse.model_validate(product))


@router.put("/{product_id}", response_model=ApiResponse[ProductResponse])
async def update_product(
    product_id: UUID,
    data: ProductUpdate,
    service: Products,
    actor: CurrentActor,
) -> ApiResponse[ProductResponse]:
    """Update a product.

    ``images`` are appended. When ``images_to_keep`` is given, existing images
    not listed there are removed and deleted from the media host.
    """
    product = await service.update(actor, product_id, data.model_dump(exclude_unset=True))
    return ApiResponse[ProductResponse](data=ProductResponse.model_validate(product))


@router.delete("/{product_id}", response_model=ApiResponse[None])
async def delete_product(
    product_id: UUID,
    service: Products,
    actor: CurrentActor,
) -> ApiResponse[None]:
    await service.delete(actor, product_id)
    return ApiResponse[None](message="Product deleted")


@router.put("/{product_id}/redirect", response_model=ApiResponse[ProductResponse])
async def increment_redirect(product_id: UUID, service: Products) -> ApiResponse[ProductResponse]:
    """Count a storefront click-through. Public."""
    product = await service.increment(product_id, "redirects")
    return ApiResponse[ProductResponse](data=ProductResponse.model_validate(product))
