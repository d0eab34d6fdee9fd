"""
Orders Infrastructure Repositories

Repository implementations for data access.
"""

from .inventory_history_repository import SQLAlchemyInventoryHistoryRepository
from .order_repository import SQLAlchemyOrderRepository
from .product_stock_repository import SQLAlchemyProductStockRepository

__all__ = [
    "SQLAlchemyInventoryHistoryRepository",
    "SQLAlchemyOrderRepository",
    "SQLAlchemyProductStockRepository",
]
