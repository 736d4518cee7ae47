"""Association tables for many-to-many reference sets."""

from sqlalchemy import Column, ForeignKey, Table, Uuid

from app.models.base import Base


def _link_table(name: str, left: tuple[str, str], right: tuple[str, str]) -> Table:
    left_column, left_target = left
    right_column, right_target = right
    return Table(
        name,
        Base.metadata,
        Column(left_column, Uuid, ForeignKey(left_target, ondelete="CASCADE"), primary_key=True),
        Column(right_column, Uuid, ForeignKey(right_target, ondelete="CASCADE"), primary_key=True),
    )


product_attributes = _link_table(
    "product_attributes",
    ("product_id", "products.id"),
    ("attribute_id", "attributes.id"),
)

site_hero_slides = _link_table(
    "site_hero_slides",
    ("site_id", "site_details.id"),
    ("hero_slide_id", "hero_slides.id"),
)

site_products = _link_table(
    "site_products",
    ("site_id", "site_details.id"),
    ("product_id", "products.id"),
)

site_stories = _link_table(
    "site_stories",
    ("site_id", "site_details.id"),
    ("story_id", "stories.id"),
)

site_categories = _link_table(
    "site_categories",
    ("site_id", "site_details.id"),
    ("category_id", "categories.id"),
)

story_story_cards = _link_table(
    "story_story_cards",
    ("story_id", "stories.id"),
    ("story_card_id", "story_cards.id"),
)

analytics_products = _link_table(
    "analytics_products",
    ("analytics_id", "analytics.id"),
    ("product_id", "products.id"),
)
