"""
Mock factories for creating test collaborators quickly.

``create_mock_*`` return AsyncMocks with default return values. The
``InMemory*`` classes keep state so multi-step scenarios can be asserted
without a database.
"""

import copy
from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

from app.domains.orders.application.dto import TransitionContext
from app.domains.orders.domain.entities import InventoryHistoryEntry, Order


def create_transition_context(
    tenant_id: UUID | None = None,
    performed_by: str | None = "tester",
    cancellation_reason: str | None = None,
    notes: str | None = None,
) -> TransitionContext:
    return TransitionContext(
        tenant_id=tenant_id if tenant_id is not None else uuid4(),
        performed_by=performed_by,
        cancellation_reason=cancellation_reason,
        notes=notes,
    )


def create_mock_order_repository(order: Order | None = None, written: bool = True) -> AsyncMock:
    mock = AsyncMock()
    mock.get_by_id = AsyncMock(return_value=order)
    mock.update_status = AsyncMock(return_value=written)
    return mock


def create_mock_history_repository(applied: set[str] | None = None) -> AsyncMock:
    mock = AsyncMock()
    mock.add = AsyncMock(side_effect=lambda entry: entry)
    mock.find_applied_item_ids = AsyncMock(return_value=set(applied or ()))
    mock.list_for_reference = AsyncMock(return_value=[])
    return mock


class InMemoryProductStockRepository:
    """Stock table keyed by (tenant_id, product_id)."""

    def __init__(self, stock: dict[tuple[UUID, UUID], float] | None = None):
        self.stock: dict[tuple[UUID, UUID], float] = dict(stock or {})
        self.writes: list[tuple[UUID, float, float]] = []

    def put(self, tenant_id: UUID, product_id: UUID, quantity: float) -> None:
        self.stock[(tenant_id, product_id)] = quantity

    async def get_stock(self, product_id: UUID, tenant_id: UUID) -> float | None:
        return self.stock.get((tenant_id, product_id))

    async def compare_and_set_stock(
        self,
        product_id: UUID,
        tenant_id: UUID,
        expected_quantity: float,
        new_quantity: float,
    ) -> bool:
        key = (tenant_id, product_id)
        if self.stock.get(key) != expected_quantity:
            return False
        self.stock[key] = new_quantity
        self.writes.append((product_id, expected_quantity, new_quantity))
        return True


class InMemoryInventoryHistoryRepository:
    def __init__(self):
        self.entries: list[InventoryHistoryEntry] = []

    async def add(self, entry: InventoryHistoryEntry) -> InventoryHistoryEntry:
        entry.id = entry.id or uuid4()
        self.entries.append(entry)
        return entry

    async def find_applied_item_ids(self, tenant_id: UUID, reference_type: str, reference_id: str) -> set[str]:
        return {
            str(entry.order_item_id)
            for entry in self.entries
            if entry.tenant_id == tenant_id
            and entry.reference_type == reference_type
            and entry.reference_id == reference_id
            and entry.order_item_id
        }

    async def list_for_reference(
        self,
        tenant_id: UUID,
        reference_id: str,
        reference_type: str | None = None,
    ) -> list[InventoryHistoryEntry]:
        return [
            entry
            for entry in self.entries
            if entry.tenant_id == tenant_id
            and entry.reference_id == reference_id
            and (reference_type is None or entry.reference_type == reference_type)
        ]


class InMemoryOrderRepository:
    """Orders keyed by (tenant_id, order_id); status writes are conditional."""

    def __init__(self, *orders: Order):
        self.orders: dict[tuple[UUID, UUID], Order] = {}
        self.status_writes: list[dict[str, Any]] = []
        for order in orders:
            self.save(order)

    def save(self, order: Order) -> None:
        self.orders[(order.tenant_id, order.id)] = order

    async def get_by_id(self, order_id: UUID, tenant_id: UUID) -> Order | None:
        # Copies, like rows loaded from a database
        order = self.orders.get((tenant_id, order_id))
        return copy.deepcopy(order) if order else None

    async def update_status(
        self,
        order_id: UUID,
        tenant_id: UUID,
        expected_status: str,
        new_status: str,
        changed_at: datetime,
        milestone_field: str | None = None,
        cancellation_reason: str | None = None,
    ) -> bool:
        order = self.orders.get((tenant_id, order_id))
        if order is None or order.status != expected_status:
            return False
        order.status = new_status
        if milestone_field and getattr(order, milestone_field) is None:
            setattr(order, milestone_field, changed_at)
        if cancellation_reason is not None:
            order.cancellation_reason = cancellation_reason
        self.status_writes.append({"order_id": order_id, "status": new_status, "at": changed_at})
        return True


class FakeRedis:
    """Just enough of redis.asyncio.Redis for SCAN + DEL."""

    def __init__(self, keys: list[str] | None = None):
        self.keys = set(keys or [])
        self.scanned: list[str] = []

    async def scan_iter(self, match: str | None = None, count: int | None = None):
        self.scanned.append(match)
        prefix = match[:-1] if match and match.endswith("*") else match
        for key in sorted(self.keys):
            if prefix is None or key.startswith(prefix):
                yield key

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if key in self.keys:
                self.keys.remove(key)
                removed += 1
        return removed
