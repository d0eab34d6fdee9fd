"""order_lifecycle_baseline

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

Creates orders, order_items, products and the append-only inventory_history
ledger.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    """Create order lifecycle tables."""
    # 1. Products
    op.create_table(
        "products",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("sku", sa.String(64)),
        sa.Column("stock_quantity", sa.Float(), nullable=False, server_default="0"),
        sa.Column("available_quantity", sa.Float(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_products_tenant", "products", ["tenant_id"])
    op.create_index("idx_products_tenant_sku", "products", ["tenant_id", "sku"])

    # 2. Orders
    op.create_table(
        "orders",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.Column("kind", sa.String(10), nullable=False, server_default="sell"),
        sa.Column("order_number", sa.String(50), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("total_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("payment_status", sa.String(20), nullable=False, server_default="unpaid"),
        sa.Column("confirmed_at", sa.DateTime(timezone=True)),
        sa.Column("shipped_at", sa.DateTime(timezone=True)),
        sa.Column("delivered_at", sa.DateTime(timezone=True)),
        sa.Column("ordered_at", sa.DateTime(timezone=True)),
        sa.Column("received_at", sa.DateTime(timezone=True)),
        sa.Column("cancelled_at", sa.DateTime(timezone=True)),
        sa.Column("cancellation_reason", sa.Text()),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_orders_tenant", "orders", ["tenant_id"])
    op.create_index("idx_orders_tenant_status", "orders", ["tenant_id", "kind", "status"])
    op.create_index("idx_orders_tenant_number", "orders", ["tenant_id", "order_number"], unique=True)

    # 3. Order items
    op.create_table(
        "order_items",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("order_id", sa.Uuid(), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.Uuid(), sa.ForeignKey("products.id", ondelete="SET NULL"), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("product_name", sa.String(255), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("quantity_unit", sa.String(10), nullable=False, server_default="unit"),
        sa.Column("unit_price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("metadata", JSONType),
    )
    op.create_index("idx_order_items_order", "order_items", ["order_id"])
    op.create_index("idx_order_items_product", "order_items", ["product_id"])

    # 4. Inventory ledger
    op.create_table(
        "inventory_history",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.Column("product_id", sa.Uuid(), sa.ForeignKey("products.id", ondelete="SET NULL"), nullable=True),
        sa.Column("change_type", sa.String(20), nullable=False),
        sa.Column("previous_quantity", sa.Float(), nullable=False),
        sa.Column("new_quantity", sa.Float(), nullable=False),
        sa.Column("change_amount", sa.Float(), nullable=False),
        sa.Column("reference_type", sa.String(50), nullable=False),
        sa.Column("reference_id", sa.String(64), nullable=False),
        sa.Column("reason", sa.String(100)),
        sa.Column("notes", sa.Text()),
        sa.Column("performed_by", sa.String(100)),
        sa.Column("metadata", JSONType, nullable=False),
    )
    op.create_index("idx_inventory_history_tenant_product", "inventory_history", ["tenant_id", "product_id"])
    op.create_index(
        "idx_inventory_history_reference",
        "inventory_history",
        ["tenant_id", "reference_type", "reference_id"],
    )


def downgrade() -> None:
    """Drop order lifecycle tables."""
    op.drop_table("inventory_history")
    op.drop_table("order_items")
    op.drop_table("orders")
    op.drop_table("products")
