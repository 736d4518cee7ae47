"""API v1 router combining all route modules."""

from fastapi import APIRouter

from app.api.v1 import (
    admin,
    analytics,
    attributes,
    auth,
    businesses,
    categories,
    health,
    hero_slides,
    products,
    sellers,
    site_details,
    stories,
    story_cards,
    uploads,
)

api_router = APIRouter()

# Health checks (no prefix, no auth)
api_router.include_router(health.router)

# Registration, OTP verification, login and federated sign-in
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Seller profiles (create promotes, delete demotes)
api_router.include_router(sellers.router, prefix="/sellers", tags=["sellers"])

# Catalog
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(attributes.router, prefix="/attributes", tags=["attributes"])

# Storefronts
api_router.include_router(businesses.router, prefix="/businesses", tags=["businesses"])
api_router.include_router(site_details.router, prefix="/site-details", tags=["site-details"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])

# Site content
api_router.include_router(hero_slides.router, prefix="/hero-slides", tags=["hero-slides"])
api_router.include_router(stories.router, prefix="/stories", tags=["stories"])
api_router.include_router(story_cards.router, prefix="/story-cards", tags=["story-cards"])

# Media uploads
api_router.include_router(uploads.router, prefix="/uploads", tags=["uploads"])

# User management (admin only)
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
