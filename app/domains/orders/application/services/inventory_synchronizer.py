"""
Inventory Synchronizer

Applies one stock delta to one product with a conditional write.
"""

import logging
from uuid import UUID

from app.core.domain import ConcurrencyException
from app.domains.orders.application.dto import StockAdjustment
from app.domains.orders.application.ports import IProductStockRepository
from app.domains.orders.domain.services import StockMode, compute_new_quantity

logger = logging.getLogger(__name__)


class InventorySynchronizer:
    """
    Read-compute-write on ``products.stock_quantity``.

    The write only lands if stock still holds the value that was read. A
    lost race re-reads and tries again, up to ``max_attempts`` times.
    """

    def __init__(self, product_repository: IProductStockRepository, max_attempts: int = 3):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.product_repository = product_repository
        self.max_attempts = max_attempts

    async def apply(
        self,
        product_id: UUID,
        tenant_id: UUID,
        delta: float,
        mode: StockMode,
    ) -> StockAdjustment | None:
        """
        Apply ``delta`` in ``mode`` and return the adjustment.

        Returns:
            StockAdjustment, or None when the product is gone for this tenant

        Raises:
            ConcurrencyException: Every attempt lost the race
        """
        for attempt in range(1, self.max_attempts + 1):
            current = await self.product_repository.get_stock(product_id, tenant_id)
            if current is None:
                logger.info(f"Product {product_id} not found for tenant {tenant_id}; stock left unchanged")
                return None

            new_quantity = compute_new_quantity(current, delta, mode)
            written = await self.product_repository.compare_and_set_stock(
                product_id, tenant_id, expected_quantity=current, new_quantity=new_quantity
            )
            if written:
                logger.debug(f"Stock for product {product_id}: {current} -> {new_quantity} ({mode.value})")
                return StockAdjustment(
                    product_id=product_id,
                    previous_quantity=current,
                    new_quantity=new_quantity,
                    change_amount=new_quantity - current,
                )

            logger.warning(
                f"Stock for product {product_id} changed during update "
                f"(attempt {attempt}/{self.max_attempts})"
            )

        raise ConcurrencyException("Product", product_id, expected="unchanged stock_quantity")
