"""Initial schema: identity, catalog, storefront and content tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _link_table(name: str, left: tuple[str, str], right: tuple[str, str]) -> None:
    left_column, left_table = left
    right_column, right_table = right
    op.create_table(
        name,
        sa.Column(left_column, sa.Uuid(), nullable=False),
        sa.Column(right_column, sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(
            [left_column],
            [f"{left_table}.id"],
            name=op.f(f"fk_{name}_{left_column}_{left_table}"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            [right_column],
            [f"{right_table}.id"],
            name=op.f(f"fk_{name}_{right_column}_{right_table}"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(left_column, right_column, name=op.f(f"pk_{name}")),
    )


def upgrade() -> None:
    user_role = sa.Enum("visitor", "seller", "admin", name="user_role")

    op.create_table(
        "sellers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone_number", sa.String(32), nullable=False),
        sa.Column("whatsapp_number", sa.String(32), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_sellers")),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("google_id", sa.String(255), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("phone_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("role", user_role, nullable=False, server_default="visitor"),
        sa.Column("seller_id", sa.Uuid(), nullable=True),
        sa.Column("otp_code", sa.String(6), nullable=True),
        sa.Column("otp_expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["seller_id"],
            ["sellers.id"],
            name=op.f("fk_users_seller_id_sellers"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("google_id", name=op.f("uq_users_google_id")),
        sa.UniqueConstraint("seller_id", name=op.f("uq_users_seller_id")),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_phone"), "users", ["phone"], unique=True)

    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("category_name", sa.String(255), nullable=False),
        sa.Column("seller_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["seller_id"],
            ["sellers.id"],
            name=op.f("fk_categories_seller_id_sellers"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_categories")),
        sa.UniqueConstraint("category_name", name=op.f("uq_categories_category_name")),
    )
    op.create_index(op.f("ix_categories_seller_id"), "categories", ["seller_id"])

    op.create_table(
        "attributes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("attribute_name", sa.String(255), nullable=False),
        sa.Column("options", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_attributes")),
    )

    op.create_table(
        "products",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("seller_id", sa.Uuid(), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=True),
        sa.Column("product_name", sa.String(500), nullable=False),
        sa.Column("product_description", sa.Text(), nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("inventory", sa.String(100), nullable=False, server_default="In Stock"),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("visits", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("redirects", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["seller_id"],
            ["sellers.id"],
            name=op.f("fk_products_seller_id_sellers"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["categories.id"],
            name=op.f("fk_products_category_id_categories"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_products")),
    )
    op.create_index(op.f("ix_products_seller_id"), "products", ["seller_id"])
    op.create_index(op.f("ix_products_category_id"), "products", ["category_id"])

    op.create_table(
        "site_details",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("site_name", sa.String(255), nullable=False),
        sa.Column("site_tagline", sa.String(500), nullable=True),
        sa.Column("site_url", sa.String(1024), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_site_details")),
    )

    op.create_table(
        "businesses",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("business_tagline", sa.String(500), nullable=True),
        sa.Column("business_email", sa.String(255), nullable=False),
        sa.Column("template_id", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("seller_id", sa.Uuid(), nullable=False),
        sa.Column("site_id", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["seller_id"],
            ["sellers.id"],
            name=op.f("fk_businesses_seller_id_sellers"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["site_id"],
            ["site_details.id"],
            name=op.f("fk_businesses_site_id_site_details"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_businesses")),
    )
    op.create_index(op.f("ix_businesses_seller_id"), "businesses", ["seller_id"])

    op.create_table(
        "analytics",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("business_id", sa.Uuid(), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("clicks", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["business_id"],
            ["businesses.id"],
            name=op.f("fk_analytics_business_id_businesses"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_analytics")),
    )
    op.create_index(op.f("ix_analytics_business_id"), "analytics", ["business_id"])

    op.create_table(
        "hero_slides",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tagline", sa.String(500), nullable=False),
        sa.Column("image", sa.String(1024), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_hero_slides")),
    )

    op.create_table(
        "story_cards",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("story_card_title", sa.String(255), nullable=False),
        sa.Column("story_card_description", sa.Text(), nullable=True),
        sa.Column("story_card_image", sa.String(1024), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_story_cards")),
    )

    op.create_table(
        "stories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("story_title", sa.String(255), nullable=False),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_stories")),
    )

    op.create_table(
        "uploads",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("files", sa.JSON(), nullable=False),
        sa.Column("uploaded_by", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["uploaded_by"],
            ["users.id"],
            name=op.f("fk_uploads_uploaded_by_users"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_uploads")),
    )

    # Reference sets
    _link_table("product_attributes", ("product_id", "products"), ("attribute_id", "attributes"))
    _link_table("site_hero_slides", ("site_id", "site_details"), ("hero_slide_id", "hero_slides"))
    _link_table("site_products", ("site_id", "site_details"), ("product_id", "products"))
    _link_table("site_stories", ("site_id", "site_details"), ("story_id", "stories"))
    _link_table("site_categories", ("site_id", "site_details"), ("category_id", "categories"))
    _link_table("story_story_cards", ("story_id", "stories"), ("story_card_id", "story_cards"))
    _link_table("analytics_products", ("analytics_id", "analytics"), ("product_id", "products"))


def downgrade() -> None:
    for name in (
        "analytics_products",
        "story_story_cards",
        "site_categories",
        "site_stories",
        "site_products",
        "site_hero_slides",
        "product_attributes",
        "uploads",
        "stories",
        "story_cards",
        "hero_slides",
        "analytics",
        "businesses",
        "site_details",
        "products",
        "attributes",
        "categories",
        "users",
        "sellers",
    ):
        op.drop_table(name)

    sa.Enum(name="user_role").drop(op.get_bind(), checkfirst=True)
