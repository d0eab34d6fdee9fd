"""
Audit Log Writer

Appends inventory ledger entries and answers the "already applied" query
used to keep side effects from running twice for the same order item.
"""

import logging
from uuid import UUID

from app.domains.orders.application.ports import IInventoryHistoryRepository
from app.domains.orders.domain.entities import InventoryHistoryEntry

logger = logging.getLogger(__name__)


class AuditLogWriter:
    def __init__(self, history_repository: IInventoryHistoryRepository):
        self.history_repository = history_repository

    async def record(self, entry: InventoryHistoryEntry) -> InventoryHistoryEntry | None:
        """
        Insert one entry.

        A failed insert is logged and reported as None; the stock change it
        describes has already happened and is not undone.
        """
        try:
            return await self.history_repository.add(entry)
        except Exception as e:
            logger.error(
                f"Failed to write inventory history for product {entry.product_id} "
                f"({entry.reference_type} {entry.reference_id}): {e}"
            )
            return None

    async def applied_item_ids(self, tenant_id: UUID, reference_type: str, reference_id: str) -> set[str]:
        return await self.history_repository.find_applied_item_ids(tenant_id, reference_type, reference_id)
