"""
Product Stock Repository Implementation

SQLAlchemy implementation of IProductStockRepository.
"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.orders.application.ports import IProductStockRepository
from app.domains.orders.infrastructure.persistence_errors import PERSISTENCE_ERRORS, translate_persistence_error
from app.models.db.base import utc_now
from app.models.db.inventory import Product as ProductModel

logger = logging.getLogger(__name__)


class SQLAlchemyProductStockRepository(IProductStockRepository):
    """
    Stock reads and conditional stock writes, scoped by tenant.

    ``available_quantity`` is written together with ``stock_quantity`` and
    always receives the same value.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        tenant_id: UUID,
        name: str,
        stock_quantity: float = 0,
        sku: str | None = None,
        product_id: UUID | None = None,
    ) -> UUID:
        """Insert a product and return its id."""
        new_id = product_id or uuid4()
        try:
            self.session.add(
                ProductModel(
                    id=new_id,
                    tenant_id=tenant_id,
                    name=name,
                    sku=sku,
                    stock_quantity=stock_quantity,
                    available_quantity=stock_quantity,
                )
            )
            await self.session.commit()
            return new_id
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error creating product {name}: {e}")
            await self.session.rollback()
            raise translate_persistence_error("create_product", e) from e

    async def get_stock(self, product_id: UUID, tenant_id: UUID) -> float | None:
        try:
            result = await self.session.execute(
                select(ProductModel.stock_quantity).where(
                    ProductModel.id == product_id,
                    ProductModel.tenant_id == tenant_id,
                )
            )
            value = result.scalar_one_or_none()
            return float(value) if value is not None else None
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error reading stock for product {product_id}: {e}")
            await self.session.rollback()
            raise translate_persistence_error("get_stock", e) from e

    async def compare_and_set_stock(
        self,
        product_id: UUID,
        tenant_id: UUID,
        expected_quantity: float,
        new_quantity: float,
    ) -> bool:
        try:
            result = await self.session.execute(
                update(ProductModel)
                .where(
                    ProductModel.id == product_id,
                    ProductModel.tenant_id == tenant_id,
                    ProductModel.stock_quantity == expected_quantity,
                )
                .values(
                    stock_quantity=new_quantity,
                    available_quantity=new_quantity,
                    updated_at=utc_now(),
                )
                .execution_options(synchronize_session=False)
            )
            await self.session.commit()
            return result.rowcount == 1
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error updating stock for product {product_id}: {e}")
            await self.session.rollback()
            raise translate_persistence_error("update_stock", e) from e
