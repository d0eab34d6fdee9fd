"""
Reconciliation Policy

Which status changes move stock, in which direction, and how the ledger
describes the movement.
"""

from dataclasses import dataclass
from enum import Enum

from ..entities.inventory_history import ChangeType, ReferenceType
from ..entities.order import Order, OrderItem
from ..value_objects.order_status import OrderKind

SOURCE = "status_transition"


class StockMode(str, Enum):
    """RESTORE adds the delta, DEDUCT removes its magnitude. Both floor at zero."""

    RESTORE = "restore"
    DEDUCT = "deduct"


@dataclass(frozen=True)
class ReconciliationRule:
    mode: StockMode
    change_type: ChangeType
    reference_type: ReferenceType
    reason: str

    def notes_for(self, order: Order) -> str:
        if self.reference_type is ReferenceType.ORDER_CANCELLED:
            return "Order cancelled - inventory restored"
        if self.reference_type is ReferenceType.ORDER_DELIVERED:
            return f"Order {order.order_number} delivered - inventory deducted"
        return f"Received from PO {order.order_number}"

    def metadata_for(self, order: Order, item: OrderItem) -> dict:
        metadata = {
            "order_id": str(order.id),
            "order_item_id": str(item.id),
            "order_number": order.order_number,
            "quantity_unit": item.quantity_unit,
            "source": SOURCE,
        }
        if self.reference_type is ReferenceType.ORDER_CANCELLED:
            metadata["cancellation_reason"] = order.cancellation_reason
        return metadata


_RULES: dict[tuple[OrderKind, str], ReconciliationRule] = {
    (OrderKind.SELL, "cancelled"): ReconciliationRule(
        mode=StockMode.RESTORE,
        change_type=ChangeType.RETURN,
        reference_type=ReferenceType.ORDER_CANCELLED,
        reason="order_cancelled",
    ),
    (OrderKind.SELL, "delivered"): ReconciliationRule(
        mode=StockMode.DEDUCT,
        change_type=ChangeType.SALE,
        reference_type=ReferenceType.ORDER_DELIVERED,
        reason="order_delivered",
    ),
    (OrderKind.BUY, "received"): ReconciliationRule(
        mode=StockMode.RESTORE,
        change_type=ChangeType.STOCK_IN,
        reference_type=ReferenceType.PURCHASE_ORDER_RECEIVED,
        reason="restock",
    ),
    # Purchase order cancellation moves nothing: stock only arrives on
    # receipt, and received orders cannot be cancelled.
}


def reconciliation_for(kind: OrderKind | str, target_status: str) -> ReconciliationRule | None:
    """Rule for entering ``target_status``, or None when stock stays put."""
    return _RULES.get((OrderKind(kind), target_status))


def compute_new_quantity(current: float, delta: float, mode: StockMode) -> float:
    if mode is StockMode.RESTORE:
        return max(0.0, current + delta)
    return max(0.0, current - abs(delta))
