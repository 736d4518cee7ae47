"""SQLAlchemy models."""

from app.models.analytics import Analytics
from app.models.attribute import Attribute
from app.models.base import Base
from app.models.business import Business
from app.models.category import Category
from app.models.hero_slide import HeroSlide
from app.models.product import Product
from app.models.seller import Seller
from app.models.site import Site
from app.models.story import Story, StoryCard
from app.models.upload import Upload
from app.models.user import User, UserRole

__all__ = [
    # Base
    "Base",
    # Identity
    "User",
    "UserRole",
    "Seller",
    # Storefront
    "Business",
    "Site",
    "Analytics",
    # Catalog
    "Product",
    "Category",
    "Attribute",
    # Content
    "HeroSlide",
    "Story",
    "StoryCard",
    # Media
    "Upload",
]
