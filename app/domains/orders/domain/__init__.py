"""
Orders Domain Layer

Domain-Driven Design implementation of the order lifecycle bounded context.

This module contains:
- Entities: Order, OrderItem, InventoryHistoryEntry
- Value Objects: status enumerations and the per-kind StatusGraph
- Domain Services: EditabilityGuard and the stock reconciliation rules
"""

from app.domains.orders.domain.entities import (
    ChangeType,
    InventoryHistoryEntry,
    Order,
    OrderItem,
    ReferenceType,
)
from app.domains.orders.domain.services import (
    EditabilityGuard,
    GuardDecision,
    ReconciliationRule,
    StockMode,
    reconciliation_for,
)
from app.domains.orders.domain.value_objects import (
    OrderKind,
    PaymentStatus,
    PurchaseOrderStatus,
    SellOrderStatus,
    StatusGraph,
    get_status_graph,
)

__all__ = [
    # Entities
    "Order",
    "OrderItem",
    "InventoryHistoryEntry",
    "ChangeType",
    "ReferenceType",
    # Value Objects
    "OrderKind",
    "SellOrderStatus",
    "PurchaseOrderStatus",
    "PaymentStatus",
    "StatusGraph",
    "get_status_graph",
    # Services
    "EditabilityGuard",
    "GuardDecision",
    "ReconciliationRule",
    "StockMode",
    "reconciliation_for",
]
