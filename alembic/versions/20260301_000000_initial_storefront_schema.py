"""Initial storefront schema for CELESTIAL Crystals

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

Creates the storefront tables:
- Customers and shipping addresses
- Crystals with stock levels and the inventory log
- Orders, order lines and status history
- Reviews, newsletter subscribers and blog posts

Catalog rows are not seeded here; the server syncs the static catalog into
cc_crystals on startup (SEED_CATALOG_ON_STARTUP) or through the admin
inventory sync endpoint.

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all storefront tables."""

    # Create cc_users table
    op.create_table(
        "cc_users",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="USER"),
        sa.Column("newsletter_subscribed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("marketing_emails", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_cc_users_email", "cc_users", ["email"], unique=True)
    op.create_index("ix_cc_users_id", "cc_users", ["id"])

    # Create cc_addresses table
    op.create_table(
        "cc_addresses",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(32), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("address1", sa.String(255), nullable=False),
        sa.Column("address2", sa.String(255), nullable=True),
        sa.Column("city", sa.String(100), nullable=False, server_default=""),
        sa.Column("province", sa.String(100), nullable=False, server_default=""),
        sa.Column("postal_code", sa.String(20), nullable=False, server_default=""),
        sa.Column("country", sa.String(2), nullable=False, server_default="CA"),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["cc_users.id"]),
    )
    op.create_index("ix_cc_addresses_user_id", "cc_addresses", ["user_id"])

    # Create cc_crystals table
    op.create_table(
        "cc_crystals",
        sa.Column("id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("chakra", sa.String(100), nullable=False, server_default=""),
        sa.Column("element", sa.String(50), nullable=False, server_default=""),
        sa.Column("hardness", sa.String(50), nullable=False, server_default=""),
        sa.Column("origin", sa.String(255), nullable=False, server_default=""),
        sa.Column("rarity", sa.String(20), nullable=False, server_default="Common"),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("images", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("colors", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("properties", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("zodiac_signs", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("birth_months", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("stock_quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("low_stock_threshold", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_cc_crystals_id", "cc_crystals", ["id"])
    op.create_index("ix_cc_crystals_slug", "cc_crystals", ["slug"], unique=True)
    op.create_index("ix_cc_crystals_category", "cc_crystals", ["category"])

    # Create cc_inventory_logs table
    op.create_table(
        "cc_inventory_logs",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("crystal_id", sa.String(100), nullable=False),
        sa.Column("change_type", sa.String(20), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("previous_quantity", sa.Integer(), nullable=False),
        sa.Column("new_quantity", sa.Integer(), nullable=False),
        sa.Column("reason", sa.String(500), nullable=True),
        sa.Column("reference", sa.String(100), nullable=True),
        sa.Column("created_by", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["crystal_id"], ["cc_crystals.id"]),
    )
    op.create_index("ix_cc_inventory_logs_crystal_id", "cc_inventory_logs", ["crystal_id"])
    op.create_index("ix_cc_inventory_logs_created_at", "cc_inventory_logs", ["created_at"])

    # Create cc_orders table
    op.create_table(
        "cc_orders",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("order_number", sa.String(20), nullable=False),
        sa.Column("user_id", sa.String(32), nullable=False),
        sa.Column("shipping_address_id", sa.String(32), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("payment_status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("payment_method", sa.String(50), nullable=True),
        sa.Column("payment_intent_id", sa.String(255), nullable=True),
        sa.Column("currency", sa.String(3), nullable=False, server_default="usd"),
        sa.Column("subtotal", sa.Float(), nullable=False, server_default="0"),
        sa.Column("discount_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("shipping_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("tax_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("total_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("discount_code", sa.String(50), nullable=True),
        sa.Column("tracking_number", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("shipped_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("delivered_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["cc_users.id"]),
        sa.ForeignKeyConstraint(["shipping_address_id"], ["cc_addresses.id"]),
    )
    op.create_index("ix_cc_orders_id", "cc_orders", ["id"])
    op.create_index("ix_cc_orders_order_number", "cc_orders", ["order_number"], unique=True)
    op.create_index("ix_cc_orders_user_id", "cc_orders", ["user_id"])
    op.create_index("ix_cc_orders_status", "cc_orders", ["status"])
    op.create_index("ix_cc_orders_payment_intent_id", "cc_orders", ["payment_intent_id"], unique=True)
    op.create_index("ix_cc_orders_created_at", "cc_orders", ["created_at"])

    # Create cc_order_items table
    op.create_table(
        "cc_order_items",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("order_id", sa.String(32), nullable=False),
        sa.Column("crystal_id", sa.String(100), nullable=False),
        sa.Column("crystal_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["order_id"], ["cc_orders.id"]),
        sa.ForeignKeyConstraint(["crystal_id"], ["cc_crystals.id"]),
    )
    op.create_index("ix_cc_order_items_order_id", "cc_order_items", ["order_id"])
    op.create_index("ix_cc_order_items_crystal_id", "cc_order_items", ["crystal_id"])

    # Create cc_order_status_history table
    op.create_table(
        "cc_order_status_history",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("order_id", sa.String(32), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("note", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["order_id"], ["cc_orders.id"]),
    )
    op.create_index("ix_cc_order_status_history_order_id", "cc_order_status_history", ["order_id"])

    # Create cc_reviews table
    op.create_table(
        "cc_reviews",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("crystal_id", sa.String(100), nullable=False),
        sa.Column("user_id", sa.String(32), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(200), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["crystal_id"], ["cc_crystals.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["cc_users.id"]),
        sa.UniqueConstraint("user_id", "crystal_id", name="uq_cc_reviews_user_crystal"),
    )
    op.create_index("ix_cc_reviews_crystal_id", "cc_reviews", ["crystal_id"])
    op.create_index("ix_cc_reviews_user_id", "cc_reviews", ["user_id"])
    op.create_index("ix_cc_reviews_created_at", "cc_reviews", ["created_at"])

    # Create cc_email_subscribers table
    op.create_table(
        "cc_email_subscribers",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("newsletter", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("promotions", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("product_updates", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("source", sa.String(50), nullable=False, server_default="website"),
        sa.Column("subscribed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("unsubscribed_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_cc_email_subscribers_email", "cc_email_subscribers", ["email"], unique=True)
    op.create_index("ix_cc_email_subscribers_is_active", "cc_email_subscribers", ["is_active"])

    # Create cc_blog_posts table
    op.create_table(
        "cc_blog_posts",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("meta_description", sa.String(500), nullable=True),
        sa.Column("keywords", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("tags", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("featured_image", sa.String(500), nullable=True),
        sa.Column("crystal_id", sa.String(100), nullable=True),
        sa.Column("author", sa.String(100), nullable=False, server_default="CELESTIAL Team"),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("is_ai_generated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reading_time", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_cc_blog_posts_id", "cc_blog_posts", ["id"])
    op.create_index("ix_cc_blog_posts_slug", "cc_blog_posts", ["slug"], unique=True)
    op.create_index("ix_cc_blog_posts_status", "cc_blog_posts", ["status"])
    op.create_index("ix_cc_blog_posts_created_at", "cc_blog_posts", ["created_at"])


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("cc_blog_posts")
    op.drop_table("cc_email_subscribers")
    op.drop_table("cc_reviews")
    op.drop_table("cc_order_status_history")
    op.drop_table("cc_order_items")
    op.drop_table("cc_orders")
    op.drop_table("cc_inventory_logs")
    op.drop_table("cc_crystals")
    op.drop_table("cc_addresses")
    op.drop_table("cc_users")
