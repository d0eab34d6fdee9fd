"""
Order Entity for the Orders Domain

Sell orders and purchase orders share one aggregate; ``kind`` selects the
status graph that governs them.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from app.core.domain import AggregateRoot, InvalidOperationException, Money, ValidationException

from ..value_objects.order_status import (
    CANCELLED,
    OrderKind,
    PaymentStatus,
    StatusGraph,
    get_status_graph,
)

MILESTONE_FIELDS = ("confirmed_at", "shipped_at", "delivered_at", "ordered_at", "received_at", "cancelled_at")


def default_quantity_unit(kind: OrderKind) -> str:
    """Sell orders are weighed, purchase orders are counted."""
    return "lb" if kind == OrderKind.SELL else "unit"


@dataclass
class OrderItem:
    """
    Line item of an order.

    ``product_id`` is None when the product was removed after the order was
    taken; such lines never move stock.
    """

    product_name: str
    quantity: float
    product_id: UUID | None = None
    quantity_unit: str = "unit"
    unit_price: float = 0.0
    id: UUID | None = None

    @property
    def moves_stock(self) -> bool:
        return self.product_id is not None and self.quantity > 0

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id) if self.id else None,
            "product_id": str(self.product_id) if self.product_id else None,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "quantity_unit": self.quantity_unit,
            "unit_price": self.unit_price,
        }


@dataclass
class Order(AggregateRoot[UUID]):
    """
    Order aggregate root.

    Status only moves along the kind's graph. Every milestone timestamp is
    written the first time its status is entered and never again.

    Example:
        ```python
        order = Order.create(tenant_id, OrderKind.SELL, "SO-1001", items)
        order.apply_status("confirmed")
        order.confirmed_at  # set
        ```
    """

    tenant_id: UUID | None = None
    kind: OrderKind = OrderKind.SELL
    order_number: str = ""
    status: str = "pending"
    items: list[OrderItem] = field(default_factory=list)

    total_amount: Money = field(default_factory=Money.zero)
    payment_status: PaymentStatus = PaymentStatus.UNPAID

    confirmed_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    ordered_at: datetime | None = None
    received_at: datetime | None = None
    cancelled_at: datetime | None = None

    cancellation_reason: str | None = None
    notes: str | None = None

    @classmethod
    def create(
        cls,
        tenant_id: UUID,
        kind: OrderKind,
        order_number: str,
        items: list[OrderItem] | None = None,
    ) -> "Order":
        """Create a new order in the initial status of its kind."""
        graph = get_status_graph(kind)
        order = cls(
            tenant_id=tenant_id,
            kind=OrderKind(kind),
            order_number=order_number,
            status=graph.initial_status,
            items=list(items or []),
        )
        order.total_amount = Money.from_float(sum(item.line_total for item in order.items))
        return order

    @property
    def graph(self) -> StatusGraph:
        return get_status_graph(self.kind)

    @property
    def is_locked(self) -> bool:
        """No transition leaves the current status."""
        return self.graph.is_terminal(self.status)

    @property
    def is_cancelled(self) -> bool:
        return self.status == CANCELLED

    def milestone(self, status: str) -> datetime | None:
        """Timestamp recorded when ``status`` was first entered, if any."""
        field_name = self.graph.milestone_field(status)
        return getattr(self, field_name) if field_name else None

    def apply_status(
        self,
        target: str,
        at: datetime | None = None,
        cancellation_reason: str | None = None,
    ) -> str:
        """
        Move the order to ``target`` in memory.

        Returns:
            The previous status

        Raises:
            ValidationException: Unknown status, or cancelling without a reason
            InvalidOperationException: The graph does not allow the move
        """
        if not self.graph.is_known(target):
            raise ValidationException(f"Invalid status '{target}' for {self.kind.value} orders", field="status")
        if not self.graph.can_change_status(self.status, target):
            raise InvalidOperationException(f"change status to {target}", self.status)

        previous = self.status
        if target == previous:
            return previous

        if target == CANCELLED:
            if not cancellation_reason or not cancellation_reason.strip():
                raise ValidationException("Cancellation reason is required", field="cancellation_reason")
            self.cancellation_reason = cancellation_reason.strip()

        moment = at or datetime.now(UTC)
        field_name = self.graph.milestone_field(target)
        if field_name and self.milestone(target) is None:
            setattr(self, field_name, moment)

        self.status = target
        self.updated_at = moment
        self.increment_version()
        return previous

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": str(self.id) if self.id else None,
            "tenant_id": str(self.tenant_id) if self.tenant_id else None,
            "kind": self.kind.value,
            "order_number": self.order_number,
            "status": self.status,
            "total_amount": float(self.total_amount.amount),
            "payment_status": self.payment_status.value,
            "cancellation_reason": self.cancellation_reason,
            "items": [item.to_dict() for item in self.items],
        }
        for name in MILESTONE_FIELDS:
            value = getattr(self, name)
            data[name] = value.isoformat() if value else None
        return data
