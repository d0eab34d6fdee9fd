"""Test utilities and helpers."""

from tests.utils.builders import OrderBuilder, OrderItemBuilder
from tests.utils.factories import (
    FakeRedis,
    InMemoryInventoryHistoryRepository,
    InMemoryOrderRepository,
    InMemoryProductStockRepository,
    create_mock_history_repository,
    create_mock_order_repository,
    create_transition_context,
)

__all__ = [
    # Builders
    "OrderBuilder",
    "OrderItemBuilder",
    # Factories
    "create_transition_context",
    "create_mock_order_repository",
    "create_mock_history_repository",
    # Fakes
    "InMemoryOrderRepository",
    "InMemoryProductStockRepository",
    "InMemoryInventoryHistoryRepository",
    "FakeRedis",
]
