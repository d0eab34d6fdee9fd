# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Product stock and the append-only inventory ledger.
# Tenant-Aware: Yes - tenant_id on both tables, filtered in every query.
# ============================================================================
"""
Inventory models

``inventory_history`` rows are never updated or deleted. One row is written
per order line item for every transition that moves stock.
"""

import uuid

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, String, Text, Uuid

from .base import Base, JSONType, TimestampMixin, utc_now


class Product(Base, TimestampMixin):
    """Stocked product."""

    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, nullable=False)
    name = Column(String(255), nullable=False)
    sku = Column(String(64))

    # Engine writes keep both columns equal
    stock_quantity = Column(Float, nullable=False, default=0)
    available_quantity = Column(Float, nullable=False, default=0)

    __table_args__ = (
        Index("idx_products_tenant", tenant_id),
        Index("idx_products_tenant_sku", tenant_id, sku),
    )

    def __repr__(self):
        return f"<Product(name='{self.name}', stock={self.stock_quantity})>"


class InventoryHistory(Base):
    """Immutable record of one stock change."""

    __tablename__ = "inventory_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    tenant_id = Column(Uuid, nullable=False)
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="SET NULL"), nullable=True)

    change_type = Column(String(20), nullable=False)  # return, sale, stock_in, adjustment
    previous_quantity = Column(Float, nullable=False)
    new_quantity = Column(Float, nullable=False)
    change_amount = Column(Float, nullable=False)  # signed

    reference_type = Column(String(50), nullable=False)  # order_cancelled, order_delivered, purchase_order_received
    reference_id = Column(String(64), nullable=False)
    reason = Column(String(100))
    notes = Column(Text)
    performed_by = Column(String(100))

    # order_id, order_item_id, source and, for cancellations, cancellation_reason
    meta_data = Column("metadata", JSONType, default=dict, nullable=False)

    __table_args__ = (
        Index("idx_inventory_history_tenant_product", tenant_id, product_id),
        Index("idx_inventory_history_reference", tenant_id, reference_type, reference_id),
    )

    def __repr__(self):
        return (
            f"<InventoryHistory(product={self.product_id}, {self.change_type} "
            f"{self.previous_quantity}->{self.new_quantity})>"
        )
