"""create catalog, coupon, order and delivery zone tables

Revision ID: 3f2a9c41d7e0
Revises:
Create Date: 2026-10-16 11:02:37.418204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f2a9c41d7e0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False, server_default="user"),
        sa.Column("can_login", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "product",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_product_category", "product", ["category"])

    op.create_table(
        "variant",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("product.id"), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("size_ml", sa.Integer(), nullable=False),
        sa.Column("oprice", sa.Integer(), nullable=False),
        sa.Column("discount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_variant_product_id", "variant", ["product_id"])

    op.create_table(
        "coupon",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("is_automatic", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("discount_type", sa.String(), nullable=False),
        sa.Column("discount_value", sa.Float(), nullable=False, server_default="0"),
        sa.Column("min_order_value", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("min_item_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("max_discount_amount", sa.Integer(), nullable=True),
        sa.Column("valid_from", sa.DateTime(), nullable=True),
        sa.Column("valid_until", sa.DateTime(), nullable=True),
        sa.Column("cond_required_category", sa.String(), nullable=True),
        sa.Column("cond_required_size", sa.Integer(), nullable=True),
        sa.Column("action_target_size", sa.Integer(), nullable=True),
        sa.Column("action_target_max_price", sa.Integer(), nullable=True),
        sa.Column("action_buy_x", sa.Integer(), nullable=True),
        sa.Column("action_get_y", sa.Integer(), nullable=True),
        sa.Column("include_bundles", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("first_order_only", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("max_usage_per_user", sa.Integer(), nullable=True),
        sa.Column("target_user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=True),
        sa.Column("target_category", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_coupon_code", "coupon", ["code"], unique=True)
    op.create_index("ix_coupon_is_automatic", "coupon", ["is_automatic"])

    op.create_table(
        "order",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("original_total", sa.Integer(), nullable=False),
        sa.Column("product_total", sa.Integer(), nullable=False),
        sa.Column("offer_discount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("discount_amount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("delivery_charge", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total", sa.Integer(), nullable=False),
        sa.Column("coupon_code", sa.String(), nullable=True),
        sa.Column("pincode", sa.String(), nullable=True),
        sa.Column("payment_mode", sa.String(), nullable=False, server_default="online"),
        sa.Column("status", sa.String(), nullable=False, server_default="placed"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_order_user_id", "order", ["user_id"])
    op.create_index("ix_order_coupon_code", "order", ["coupon_code"])

    op.create_table(
        "orderitem",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("order.id"), nullable=False),
        sa.Column("variant_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("line_total", sa.Integer(), nullable=False),
        sa.Column("bundle_id", sa.String(), nullable=True),
        sa.Column("component_variant_ids", sa.JSON(), nullable=True),
    )

    op.create_table(
        "delivery_zone",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("pincode", sa.String(), nullable=False),
        sa.Column("delivery_charge", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("cod_available", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_delivery_zone_pincode", "delivery_zone", ["pincode"], unique=True)


def downgrade():
    op.drop_index("ix_delivery_zone_pincode", table_name="delivery_zone")
    op.drop_table("delivery_zone")
    op.drop_table("orderitem")
    op.drop_index("ix_order_coupon_code", table_name="order")
    op.drop_index("ix_order_user_id", table_name="order")
    op.drop_table("order")
    op.drop_index("ix_coupon_is_automatic", table_name="coupon")
    op.drop_index("ix_coupon_code", table_name="coupon")
    op.drop_table("coupon")
    op.drop_index("ix_variant_product_id", table_name="variant")
    op.drop_table("variant")
    op.drop_index("ix_product_category", table_name="product")
    op.drop_table("product")
    op.drop_table("user")
