"""create order workflow tables

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-16 10:12:41.502113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


role_enum = sa.Enum("USER", "ADMIN", name="role")
discount_type_enum = sa.Enum("PERCENTAGE", "FIXED", name="discounttype")
order_status_enum = sa.Enum("PENDING", "COMPLETED", "CANCELLED", name="orderstatus")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def _soft_delete():
    return [
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
    ]


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password", sa.String(), nullable=False),
        sa.Column("role", role_enum, nullable=False, server_default="USER"),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)
    op.create_index("ix_user_is_deleted", "user", ["is_deleted"])

    op.create_table(
        "address",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column("city", sa.String(), nullable=False),
        sa.Column("state", sa.String(), nullable=False),
        sa.Column("country", sa.String(), nullable=False),
        sa.Column("zip_code", sa.String(), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_index("ix_address_user_id", "address", ["user_id"])
    op.create_index("ix_address_is_deleted", "address", ["is_deleted"])

    op.create_table(
        "product",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("sku", sa.String(), nullable=True, unique=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("discounted_price", sa.Float(), nullable=True),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_index("ix_product_slug", "product", ["slug"], unique=True)
    op.create_index("ix_product_is_deleted", "product", ["is_deleted"])

    op.create_table(
        "product_variant",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("product.id"), nullable=False),
        sa.Column("sku", sa.String(), nullable=True, unique=True),
        sa.Column("size", sa.String(), nullable=True),
        sa.Column("color", sa.String(), nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("discounted_price", sa.Float(), nullable=True),
        sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        *_soft_delete(),
        sa.CheckConstraint("stock >= 0", name="ck_product_variant_stock_non_negative"),
    )
    op.create_index("ix_product_variant_product_id", "product_variant", ["product_id"])
    op.create_index("ix_product_variant_is_deleted", "product_variant", ["is_deleted"])

    op.create_table(
        "discount",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("type", discount_type_enum, nullable=False),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("min_order_amount", sa.Float(), nullable=True),
        sa.Column("max_discount_amount", sa.Float(), nullable=True),
        sa.Column("valid_from", sa.DateTime(), nullable=True),
        sa.Column("valid_to", sa.DateTime(), nullable=True),
        sa.Column("usage_limit", sa.Integer(), nullable=True),
        sa.Column("used_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_index("ix_discount_code", "discount", ["code"], unique=True)
    op.create_index("ix_discount_is_deleted", "discount", ["is_deleted"])

    op.create_table(
        "order",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("address_id", sa.Integer(), sa.ForeignKey("address.id"), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False),
        sa.Column("status", order_status_enum, nullable=False, server_default="PENDING"),
        sa.Column("discount_id", sa.Integer(), sa.ForeignKey("discount.id"), nullable=True),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_index("ix_order_user_id", "order", ["user_id"])
    op.create_index("ix_order_status", "order", ["status"])
    op.create_index("ix_order_created_at", "order", ["created_at"])
    op.create_index("ix_order_is_deleted", "order", ["is_deleted"])

    op.create_table(
        "order_item",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("order.id"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("product.id"), nullable=False),
        sa.Column("variant_id", sa.Integer(), sa.ForeignKey("product_variant.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_order_item_order_id", "order_item", ["order_id"])

    op.create_table(
        "order_status_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("order.id"), nullable=False),
        sa.Column("status", order_status_enum, nullable=False),
        sa.Column("note", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_order_status_history_order_id", "order_status_history", ["order_id"])


def downgrade():
    op.drop_index("ix_order_status_history_order_id", table_name="order_status_history")
    op.drop_table("order_status_history")
    op.drop_index("ix_order_item_order_id", table_name="order_item")
    op.drop_table("order_item")
    for name in ("ix_order_is_deleted", "ix_order_created_at", "ix_order_status", "ix_order_user_id"):
        op.drop_index(name, table_name="order")
    op.drop_table("order")
    op.drop_index("ix_discount_is_deleted", table_name="discount")
    op.drop_index("ix_discount_code", table_name="discount")
    op.drop_table("discount")
    op.drop_index("ix_product_variant_is_deleted", table_name="product_variant")
    op.drop_index("ix_product_variant_product_id", table_name="product_variant")
    op.drop_table("product_variant")
    op.drop_index("ix_product_is_deleted", table_name="product")
    op.drop_index("ix_product_slug", table_name="product")
    op.drop_table("product")
    op.drop_index("ix_address_is_deleted", table_name="address")
    op.drop_index("ix_address_user_id", table_name="address")
    op.drop_table("address")
    op.drop_index("ix_user_is_deleted", table_name="user")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")

    bind = op.get_bind()
    order_status_enum.drop(bind, checkfirst=True)
    discount_type_enum.drop(bind, checkfirst=True)
    role_enum.drop(bind, checkfirst=True)
