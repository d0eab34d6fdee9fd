# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Sell orders and purchase orders share one table, told apart by
#              the kind column. Line items live in order_items.
# Tenant-Aware: Yes - every row carries tenant_id and every query filters it.
# ============================================================================
"""
Order management models
"""

import uuid
from typing import List

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, relationship

from .base import Base, JSONType, TimestampMixin


class Order(Base, TimestampMixin):
    """Sell order or purchase order, depending on kind."""

    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, nullable=False)
    kind = Column(String(10), nullable=False, default="sell")  # sell, buy
    order_number = Column(String(50), nullable=False)

    # Fulfillment status: sell pending/confirmed/in_transit/delivered/cancelled,
    # buy draft/ordered/received/cancelled
    status = Column(String(20), nullable=False)

    # Money, never written by status transitions
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    payment_status = Column(String(20), nullable=False, default="unpaid")  # unpaid, partial, paid, refunded

    # Milestones, each set once
    confirmed_at = Column(DateTime(timezone=True))
    shipped_at = Column(DateTime(timezone=True))
    delivered_at = Column(DateTime(timezone=True))
    ordered_at = Column(DateTime(timezone=True))
    received_at = Column(DateTime(timezone=True))
    cancelled_at = Column(DateTime(timezone=True))

    cancellation_reason = Column(Text)
    notes = Column(Text)

    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )

    __table_args__ = (
        Index("idx_orders_tenant", tenant_id),
        Index("idx_orders_tenant_status", tenant_id, kind, status),
        Index("idx_orders_tenant_number", tenant_id, order_number, unique=True),
    )

    def __repr__(self):
        return f"<Order(number='{self.order_number}', kind='{self.kind}', status='{self.status}')>"


class OrderItem(Base):
    """Line item of an order."""

    __tablename__ = "order_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    # Nullable: the product may have been deleted after the order was taken
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    position = Column(Integer, nullable=False, default=0)

    product_name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False)
    quantity_unit = Column(String(10), nullable=False, default="unit")  # lb for sell, unit for buy
    unit_price = Column(Float, nullable=False, default=0)

    meta_data = Column("metadata", JSONType, default=dict)

    order: Mapped["Order"] = relationship("Order", back_populates="items")

    __table_args__ = (
        Index("idx_order_items_order", order_id),
        Index("idx_order_items_product", product_id),
    )

    def __repr__(self):
        return f"<OrderItem(product='{self.product_name}', quantity={self.quantity} {self.quantity_unit})>"
