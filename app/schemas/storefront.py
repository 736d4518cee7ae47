"""Pydantic schemas for businesses, sites and analytics."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.schemas.common import EMAIL_PATTERN, BaseSchema, RecordSchema
from app.schemas.content import HeroSlideResponse, StoryResponse
from app.schemas.product import CategoryResponse, ProductResponse

# === Businesses ===


class BusinessCreate(BaseSchema):
    business_name: str = Field(..., min_length=1, max_length=255)
    business_tagline: str | None = Field(default=None, max_length=500)
    business_email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    template_id: int = Field(default=1, ge=1)
    seller_id: UUID | None = None
    site_id: UUID | None = None


class BusinessUpdate(BaseSchema):
    business_name: str | None = Field(default=None, min_length=1, max_length=255)
    business_tagline: str | None = Field(default=None, max_length=500)
    business_email: str | None = Field(default=None, pattern=EMAIL_PATTERN, max_length=255)
    template_id: int | None = Field(default=None, ge=1)
    site_id: UUID | None = None


class BusinessResponse(RecordSchema):
    business_name: str
    business_tagline: str | None
    business_email: str
    template_id: int
    seller_id: UUID
    site_id: UUID | None


# === Sites ===


class SiteCreate(BaseSchema):
    site_name: str = Field(..., min_length=1, max_length=255)
    site_tagline: str | None = Field(default=None, max_length=500)
    site_url: str = Field(..., min_length=1, max_length=1024)
    business_id: UUID | None = Field(
        default=None, description="Business to publish this site for"
    )
    hero_slide_ids: list[UUID] = Field(default_factory=list)
    product_ids: list[UUID] = Field(default_factory=list)
    story_ids: list[UUID] = Field(default_factory=list)
    category_ids: list[UUID] = Field(default_factory=list)


class SiteUpdate(BaseSchema):
    site_name: str | None = Field(default=None, min_length=1, max_length=255)
    site_tagline: str | None = Field(default=None, max_length=500)
    site_url: str | None = Field(default=None, min_length=1, max_length=1024)
    hero_slide_ids: list[UUID] | None = None
    product_ids: list[UUID] | None = None
    story_ids: list[UUID] | None = None
    category_ids: list[UUID] | None = None


class SiteHeroSlideAttach(BaseSchema):
    hero_slide_id: UUID


class SiteResponse(RecordSchema):
    site_name: str
    site_tagline: str | None
    site_url: str
    hero_slides: list[HeroSlideResponse] = []
    products: list[ProductResponse] = []
    stories: list[StoryResponse] = []
    categories: list[CategoryResponse] = []


# === Analytics ===


class AnalyticsCreate(BaseSchema):
    business_id: UUID
    product_ids: list[UUID] = Field(default_factory=list)
    views: int = Field(default=0, ge=0)
    clicks: int = Field(default=0, ge=0)


class AnalyticsUpdate(BaseSchema):
    """Counters are only ever incremented, so they are not editable here."""

    business_id: UUID | None = None
    product_ids: list[UUID] | None = None


class AnalyticsResponse(RecordSchema):
    business_id: UUID
    views: int
    clicks: int
    date: datetime
    products: list[ProductResponse] = []
