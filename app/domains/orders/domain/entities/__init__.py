"""
Orders Domain Entities
"""

from app.domains.orders.domain.entities.inventory_history import (
    ChangeType,
    InventoryHistoryEntry,
    ReferenceType,
)
from app.domains.orders.domain.entities.order import (
    MILESTONE_FIELDS,
    Order,
    OrderItem,
    default_quantity_unit,
)

__all__ = [
    "Order",
    "OrderItem",
    "MILESTONE_FIELDS",
    "default_quantity_unit",
    "InventoryHistoryEntry",
    "ChangeType",
    "ReferenceType",
]
