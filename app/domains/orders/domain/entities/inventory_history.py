"""
Inventory History Entity

One immutable ledger line per stock change made on behalf of an order item.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import UUID

from app.core.domain import Entity


class ChangeType(str, Enum):
    """Direction of a stock change as shown in the ledger."""

    RETURN = "return"
    SALE = "sale"
    STOCK_IN = "stock_in"
    ADJUSTMENT = "adjustment"


class ReferenceType(str, Enum):
    """What caused a stock change."""

    ORDER_CANCELLED = "order_cancelled"
    ORDER_DELIVERED = "order_delivered"
    PURCHASE_ORDER_RECEIVED = "purchase_order_received"


@dataclass
class InventoryHistoryEntry(Entity[UUID]):
    """
    Append-only ledger record.

    ``metadata`` always carries ``order_id``, ``order_item_id`` and
    ``source``; cancellations add ``cancellation_reason``.
    """

    tenant_id: UUID | None = None
    product_id: UUID | None = None
    change_type: str = ChangeType.ADJUSTMENT.value
    previous_quantity: float = 0.0
    new_quantity: float = 0.0
    change_amount: float = 0.0
    reference_type: str = ""
    reference_id: str = ""
    reason: str | None = None
    notes: str | None = None
    performed_by: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def order_item_id(self) -> str | None:
        return self.metadata.get("order_item_id")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id) if self.id else None,
            "tenant_id": str(self.tenant_id) if self.tenant_id else None,
            "product_id": str(self.product_id) if self.product_id else None,
            "change_type": self.change_type,
            "previous_quantity": self.previous_quantity,
            "new_quantity": self.new_quantity,
            "change_amount": self.change_amount,
            "reference_type": self.reference_type,
            "reference_id": self.reference_id,
            "reason": self.reason,
            "notes": self.notes,
            "performed_by": self.performed_by,
            "metadata": dict(self.metadata),
            "created_at": self.created_at.isoformat(),
        }
