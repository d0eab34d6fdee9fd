"""
Inventory History Repository Implementation

SQLAlchemy implementation of IInventoryHistoryRepository. Insert and read
only; ledger rows are never changed.
"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.orders.application.ports import IInventoryHistoryRepository
from app.domains.orders.domain.entities import InventoryHistoryEntry
from app.domains.orders.infrastructure.persistence_errors import PERSISTENCE_ERRORS, translate_persistence_error
from app.models.db.inventory import InventoryHistory as InventoryHistoryModel

logger = logging.getLogger(__name__)


class SQLAlchemyInventoryHistoryRepository(IInventoryHistoryRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, entry: InventoryHistoryEntry) -> InventoryHistoryEntry:
        """Insert one ledger entry."""
        entry_id = entry.id or uuid4()
        model = InventoryHistoryModel(
            id=entry_id,
            created_at=entry.created_at,
            tenant_id=entry.tenant_id,
            product_id=entry.product_id,
            change_type=entry.change_type,
            previous_quantity=entry.previous_quantity,
            new_quantity=entry.new_quantity,
            change_amount=entry.change_amount,
            reference_type=entry.reference_type,
            reference_id=entry.reference_id,
            reason=entry.reason,
            notes=entry.notes,
            performed_by=entry.performed_by,
            meta_data=dict(entry.metadata),
        )
        try:
            self.session.add(model)
            await self.session.commit()
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error writing inventory history for {entry.reference_type} {entry.reference_id}: {e}")
            await self.session.rollback()
            raise translate_persistence_error("add_inventory_history", e) from e

        entry.id = entry_id
        return entry

    async def find_applied_item_ids(self, tenant_id: UUID, reference_type: str, reference_id: str) -> set[str]:
        """Order item ids that already have a ledger entry for this reference."""
        try:
            result = await self.session.execute(
                select(InventoryHistoryModel.meta_data).where(
                    InventoryHistoryModel.tenant_id == tenant_id,
                    InventoryHistoryModel.reference_type == reference_type,
                    InventoryHistoryModel.reference_id == reference_id,
                )
            )
            return {
                str(metadata["order_item_id"])
                for metadata in result.scalars().all()
                if metadata and metadata.get("order_item_id")
            }
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error reading inventory history for {reference_type} {reference_id}: {e}")
            await self.session.rollback()
            raise translate_persistence_error("find_applied_items", e) from e

    async def list_for_reference(
        self,
        tenant_id: UUID,
        reference_id: str,
        reference_type: str | None = None,
    ) -> list[InventoryHistoryEntry]:
        """Ledger entries for one order, oldest first."""
        query = select(InventoryHistoryModel).where(
            InventoryHistoryModel.tenant_id == tenant_id,
            InventoryHistoryModel.reference_id == reference_id,
        )
        if reference_type:
            query = query.where(InventoryHistoryModel.reference_type == reference_type)

        try:
            result = await self.session.execute(query.order_by(InventoryHistoryModel.created_at))
            return [self._to_entity(model) for model in result.scalars().all()]
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error listing inventory history for {reference_id}: {e}")
            await self.session.rollback()
            raise translate_persistence_error("list_inventory_history", e) from e

    def _to_entity(self, model: InventoryHistoryModel) -> InventoryHistoryEntry:
        return InventoryHistoryEntry(
            id=model.id,
            created_at=model.created_at,
            updated_at=model.created_at,
            tenant_id=model.tenant_id,
            product_id=model.product_id,
            change_type=model.change_type,
            previous_quantity=float(model.previous_quantity),
            new_quantity=float(model.new_quantity),
            change_amount=float(model.change_amount),
            reference_type=model.reference_type,
            reference_id=model.reference_id,
            reason=model.reason,
            notes=model.notes,
            performed_by=model.performed_by,
            metadata=dict(model.meta_data or {}),
        )
