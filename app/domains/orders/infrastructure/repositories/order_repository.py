"""
Order Repository Implementation

SQLAlchemy implementation of IOrderRepository.
"""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import func, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.domain import Money
from app.domains.orders.application.ports import IOrderRepository
from app.domains.orders.domain.entities import MILESTONE_FIELDS, Order, OrderItem
from app.domains.orders.domain.value_objects import OrderKind, PaymentStatus
from app.domains.orders.infrastructure.persistence_errors import PERSISTENCE_ERRORS, translate_persistence_error
from app.models.db.orders import Order as OrderModel
from app.models.db.orders import OrderItem as OrderItemModel

logger = logging.getLogger(__name__)


class SQLAlchemyOrderRepository(IOrderRepository):
    """
    SQLAlchemy implementation of order repository.

    Every query filters on tenant_id. Status writes are conditional on the
    status that was read, so concurrent editors cannot both win.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, order: Order) -> Order:
        """Create a new order with its items."""
        try:
            model = self._to_model(order)
            order_id, tenant_id = model.id, model.tenant_id
            self.session.add(model)
            await self.session.commit()
            return await self.get_by_id(order_id, tenant_id)  # type: ignore[return-value]
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error creating order {order.order_number}: {e}")
            await self.session.rollback()
            raise translate_persistence_error("create_order", e) from e

    async def get_by_id(self, order_id: UUID, tenant_id: UUID) -> Order | None:
        """Get order by ID within the tenant."""
        try:
            result = await self.session.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.items))
                .where(OrderModel.id == order_id, OrderModel.tenant_id == tenant_id)
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error getting order {order_id}: {e}")
            await self.session.rollback()
            raise translate_persistence_error("get_order", e) from e

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
        """Compare-and-set status update; milestone kept if already set."""
        if milestone_field is not None and milestone_field not in MILESTONE_FIELDS:
            raise ValueError(f"Unknown milestone field: {milestone_field}")

        values: dict = {"status": new_status, "updated_at": changed_at}
        if milestone_field:
            column = OrderModel.__table__.c[milestone_field]
            values[milestone_field] = func.coalesce(column, literal(changed_at, column.type))
        if cancellation_reason is not None:
            values["cancellation_reason"] = cancellation_reason

        try:
            result = await self.session.execute(
                update(OrderModel)
                .where(
                    OrderModel.id == order_id,
                    OrderModel.tenant_id == tenant_id,
                    OrderModel.status == expected_status,
                )
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            await self.session.commit()
            return result.rowcount == 1
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error updating status for order {order_id}: {e}")
            await self.session.rollback()
            raise translate_persistence_error("update_order_status", e) from e

    def _to_entity(self, model: OrderModel) -> Order:
        """Convert database model to domain entity."""
        kind = OrderKind(model.kind)
        items = [
            OrderItem(
                id=item.id,
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=float(item.quantity),
                quantity_unit=item.quantity_unit,
                unit_price=float(item.unit_price or 0),
            )
            for item in model.items
        ]
        return Order(
            id=model.id,
            tenant_id=model.tenant_id,
            kind=kind,
            order_number=model.order_number,
            status=model.status,
            items=items,
            total_amount=Money(amount=Decimal(str(model.total_amount or 0))),
            payment_status=PaymentStatus(model.payment_status),
            confirmed_at=model.confirmed_at,
            shipped_at=model.shipped_at,
            delivered_at=model.delivered_at,
            ordered_at=model.ordered_at,
            received_at=model.received_at,
            cancelled_at=model.cancelled_at,
            cancellation_reason=model.cancellation_reason,
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, order: Order) -> OrderModel:
        """Convert domain entity to database model."""
        model = OrderModel(
            tenant_id=order.tenant_id,
            kind=order.kind.value,
            order_number=order.order_number,
            status=order.status,
            total_amount=order.total_amount.amount,
            payment_status=order.payment_status.value,
            cancellation_reason=order.cancellation_reason,
            notes=order.notes,
            **{name: getattr(order, name) for name in MILESTONE_FIELDS},
        )
        model.id = order.id or uuid4()
        model.items = [
            OrderItemModel(
                id=item.id or uuid4(),
                product_id=item.product_id,
                position=position,
                product_name=item.product_name,
                quantity=item.quantity,
                quantity_unit=item.quantity_unit,
                unit_price=item.unit_price,
            )
            for position, item in enumerate(order.items)
        ]
        return model
