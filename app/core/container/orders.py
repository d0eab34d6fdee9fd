"""
Orders Domain Container.

Single Responsibility: Wire all order lifecycle dependencies.
"""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.orders.application.services import AuditLogWriter, InventorySynchronizer, RetryPolicy
from app.domains.orders.application.use_cases import (
    BulkTransitionCoordinator,
    GetAllowedTransitionsUseCase,
    TransitionExecutor,
    TransitionOrderStatusUseCase,
)
from app.domains.orders.infrastructure.repositories import (
    SQLAlchemyInventoryHistoryRepository,
    SQLAlchemyOrderRepository,
    SQLAlchemyProductStockRepository,
)
from app.domains.orders.infrastructure.services import RedisViewCacheInvalidator

if TYPE_CHECKING:
    from app.core.container.base import BaseContainer

logger = logging.getLogger(__name__)


class OrdersContainer:
    """
    Orders domain container.

    Single Responsibility: Create order repositories, services and use cases.
    Session-bound objects are built per request from the given session.
    """

    def __init__(self, base: "BaseContainer"):
        """
        Initialize orders container.

        Args:
            base: BaseContainer with shared singletons
        """
        self._base = base

    # ==================== REPOSITORIES ====================

    def create_order_repository(self, db: AsyncSession) -> SQLAlchemyOrderRepository:
        """Create Order Repository."""
        return SQLAlchemyOrderRepository(session=db)

    def create_product_stock_repository(self, db: AsyncSession) -> SQLAlchemyProductStockRepository:
        """Create Product Stock Repository."""
        return SQLAlchemyProductStockRepository(session=db)

    def create_inventory_history_repository(self, db: AsyncSession) -> SQLAlchemyInventoryHistoryRepository:
        """Create Inventory History Repository."""
        return SQLAlchemyInventoryHistoryRepository(session=db)

    # ==================== SERVICES ====================

    def create_inventory_synchronizer(self, db: AsyncSession) -> InventorySynchronizer:
        return InventorySynchronizer(
            product_repository=self.create_product_stock_repository(db),
            max_attempts=self._base.settings.STOCK_UPDATE_MAX_ATTEMPTS,
        )

    def create_audit_log_writer(self, db: AsyncSession) -> AuditLogWriter:
        return AuditLogWriter(history_repository=self.create_inventory_history_repository(db))

    def create_retry_policy(self) -> RetryPolicy:
        return RetryPolicy.from_settings(self._base.settings)

    def create_view_cache_invalidator(self) -> RedisViewCacheInvalidator:
        return RedisViewCacheInvalidator(
            redis_client=self._base.get_redis_client(),
            prefix=self._base.settings.VIEW_CACHE_PREFIX,
        )

    # ==================== USE CASES ====================

    def create_transition_executor(self, db: AsyncSession) -> TransitionExecutor:
        """Create TransitionExecutor with dependencies."""
        return TransitionExecutor(
            order_repository=self.create_order_repository(db),
            inventory_synchronizer=self.create_inventory_synchronizer(db),
            audit_log_writer=self.create_audit_log_writer(db),
        )

    def create_transition_order_status_use_case(self, db: AsyncSession) -> TransitionOrderStatusUseCase:
        """Create TransitionOrderStatusUseCase with dependencies."""
        return TransitionOrderStatusUseCase(
            executor=self.create_transition_executor(db),
            retry_policy=self.create_retry_policy(),
        )

    def create_bulk_transition_coordinator(self, db: AsyncSession) -> BulkTransitionCoordinator:
        """Create BulkTransitionCoordinator with dependencies."""
        return BulkTransitionCoordinator(transition_use_case=self.create_transition_order_status_use_case(db))

    def create_get_allowed_transitions_use_case(self, db: AsyncSession) -> GetAllowedTransitionsUseCase:
        """Create GetAllowedTransitionsUseCase with dependencies."""
        return GetAllowedTransitionsUseCase(order_repository=self.create_order_repository(db))
