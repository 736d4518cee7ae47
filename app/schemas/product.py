"""Pydantic schemas for products, categories and attributes."""

from uuid import UUID

from pydantic import Field

from app.schemas.common import BaseSchema, RecordSchema

# === Categories ===


class CategoryCreate(BaseSchema):
    category_name: str = Field(..., min_length=1, max_length=255)
    seller_id: UUID | None = Field(
        default=None, description="Owner; required for admins, defaults to the caller for sellers"
    )


class CategoryUpdate(BaseSchema):
    category_name: str | None = Field(default=None, min_length=1, max_length=255)


class CategoryResponse(RecordSchema):
    category_name: str
    seller_id: UUID


# === Attributes ===


class AttributeCreate(BaseSchema):
    attribute_name: str = Field(..., min_length=1, max_length=255)
    options: list[str] = Field(default_factory=list)


class AttributeUpdate(BaseSchema):
    attribute_name: str | None = Field(default=None, min_length=1, max_length=255)
    options: list[str] | None = None


class AttributeResponse(RecordSchema):
    attribute_name: str
    options: list[str]


# === Products ===


class ProductCreate(BaseSchema):
    product_name: str = Field(..., min_length=1, max_length=500)
    product_description: str | None = None
    price: float = Field(..., ge=0)
    category_id: UUID
    seller_id: UUID | None = None
    is_visible: bool = True
    inventory: str = Field(default="In Stock", max_length=100)
    images: list[str] = Field(default_factory=list, description="Hosted image URLs")
    attribute_ids: list[UUID] = Field(default_factory=list)


class ProductUpdate(BaseSchema):
    product_name: str | None = Field(default=None, min_length=1, max_length=500)
    product_description: str | None = None
    price: float | None = Field(default=None, ge=0)
    category_id: UUID | None = None
    is_visible: bool | None = None
    inventory: str | None = Field(default=None, max_length=100)
    images: list[str] | None = Field(default=None, description="New image URLs to append")
    images_to_keep: list[str] | None = Field(
        default=None,
        description="Existing image URLs to keep; omitted keeps all, others are deleted",
    )
    attribute_ids: list[UUID] | None = None


class ProductResponse(RecordSchema):
    product_name: str
    product_description: str | None
    price: float
    seller_id: UUID
    category_id: UUID | None
    category: CategoryResponse | None = None
    attributes: list[AttributeResponse] = []
    is_visible: bool
    inventory: str
    images: list[str]
    visits: int
    redirects: int
