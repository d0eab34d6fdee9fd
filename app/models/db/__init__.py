"""
Database models package - Organized by responsibility
"""

from .base import Base, JSONType, TimestampMixin
from .inventory import InventoryHistory, Product
from .orders import Order, OrderItem

__all__ = [
    # Base
    "Base",
    "JSONType",
    "TimestampMixin",
    # Orders
    "Order",
    "OrderItem",
    # Inventory
    "Product",
    "InventoryHistory",
]
