"""
Orders Domain Value Objects
"""

from app.domains.orders.domain.value_objects.order_status import (
    CANCELLED,
    PURCHASE_STATUS_GRAPH,
    SELL_STATUS_GRAPH,
    OrderKind,
    PaymentStatus,
    PurchaseOrderStatus,
    SellOrderStatus,
    StatusGraph,
    get_status_graph,
)

__all__ = [
    "CANCELLED",
    "OrderKind",
    "PaymentStatus",
    "PurchaseOrderStatus",
    "SellOrderStatus",
    "StatusGraph",
    "SELL_STATUS_GRAPH",
    "PURCHASE_STATUS_GRAPH",
    "get_status_graph",
]
