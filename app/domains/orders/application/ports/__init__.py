"""
Orders Application Ports

Interface definitions (ports) for the Orders domain.
Uses Protocol for structural typing.

Every method takes the tenant id explicitly; implementations must filter
on it in the query itself.
"""

from datetime import datetime
from typing import Iterable, Protocol, runtime_checkable
from uuid import UUID

from app.domains.orders.domain.entities import InventoryHistoryEntry, Order


@runtime_checkable
class IOrderRepository(Protocol):
    """
    Interface for order repository.

    Defines the contract for order data access.
    """

    async def get_by_id(self, order_id: UUID, tenant_id: UUID) -> Order | None:
        """Get an order with its line items, scoped to the tenant"""
        ...

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
        """
        Conditionally move an order from ``expected_status`` to ``new_status``.

        Sets ``milestone_field`` only when it is still null. Returns False
        when no row matched (wrong tenant, missing, or status moved).
        """
        ...


@runtime_checkable
class IProductStockRepository(Protocol):
    """
    Interface for product stock access.
    """

    async def get_stock(self, product_id: UUID, tenant_id: UUID) -> float | None:
        """Current stock, or None when the product does not exist for the tenant"""
        ...

    async def compare_and_set_stock(
        self,
        product_id: UUID,
        tenant_id: UUID,
        expected_quantity: float,
        new_quantity: float,
    ) -> bool:
        """Write ``new_quantity`` only if stock still equals ``expected_quantity``"""
        ...


@runtime_checkable
class IInventoryHistoryRepository(Protocol):
    """
    Interface for the append-only inventory ledger.
    """

    async def add(self, entry: InventoryHistoryEntry) -> InventoryHistoryEntry:
        """Insert one ledger entry"""
        ...

    async def find_applied_item_ids(self, tenant_id: UUID, reference_type: str, reference_id: str) -> set[str]:
        """Order item ids already recorded for this reference"""
        ...

    async def list_for_reference(
        self,
        tenant_id: UUID,
        reference_id: str,
        reference_type: str | None = None,
    ) -> list[InventoryHistoryEntry]:
        """Ledger entries written for one order"""
        ...


@runtime_checkable
class IViewCacheInvalidator(Protocol):
    """
    Interface for dropping cached read views after a write.
    """

    async def invalidate(self, tenant_id: UUID, scopes: Iterable[str] | None = None) -> int:
        """Delete cached views for the tenant; returns the number of keys removed"""
        ...
