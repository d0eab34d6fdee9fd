"""
Order Status Value Objects for the Orders Domain

Status enumerations for sell orders and purchase orders, and the static
transition graph of each order kind.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from app.core.domain import StatusEnum


class OrderKind(str, Enum):
    """Order family. Sell orders go to customers, buy orders come from suppliers."""

    SELL = "sell"
    BUY = "buy"


class SellOrderStatus(StatusEnum):
    """
    Sell order lifecycle.

    Valid transitions:
    - PENDING -> CONFIRMED, CANCELLED
    - CONFIRMED -> IN_TRANSIT, CANCELLED
    - IN_TRANSIT -> DELIVERED, CANCELLED
    - DELIVERED, CANCELLED -> (terminal states)
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PurchaseOrderStatus(StatusEnum):
    """
    Purchase order lifecycle.

    Valid transitions:
    - DRAFT -> ORDERED, CANCELLED
    - ORDERED -> RECEIVED, CANCELLED
    - RECEIVED, CANCELLED -> (terminal states)
    """

    DRAFT = "draft"
    ORDERED = "ordered"
    RECEIVED = "received"
    CANCELLED = "cancelled"


class PaymentStatus(StatusEnum):
    """Payment state. Independent of fulfillment; transitions never touch it."""

    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"
    REFUNDED = "refunded"


CANCELLED = "cancelled"


@dataclass(frozen=True)
class StatusGraph:
    """
    Legal status moves for one order kind.

    ``transitions`` maps every known status to its successors, in the order
    they should be offered. Statuses with no successors are terminal.
    ``milestones`` maps a status to the order field stamped the first time
    that status is entered.
    """

    kind: OrderKind
    initial_status: str
    transitions: Mapping[str, tuple[str, ...]]
    milestones: Mapping[str, str] = field(default_factory=dict)

    @property
    def statuses(self) -> list[str]:
        return list(self.transitions)

    def is_known(self, status: str | None) -> bool:
        return status is not None and status in self.transitions

    def successors(self, status: str) -> list[str]:
        return list(self.transitions.get(status, ()))

    def is_terminal(self, status: str) -> bool:
        """Known status with no way out."""
        return self.is_known(status) and not self.transitions[status]

    def can_change_status(self, current: str, target: str) -> bool:
        """
        True when ``target`` is a listed successor of ``current``, or equals it.

        Asking to stay where the order already is counts as allowed; callers
        treat it as a no-op. Unknown statuses are never allowed.
        """
        if not self.is_known(current) or not self.is_known(target):
            return False
        return target == current or target in self.transitions[current]

    def milestone_field(self, status: str) -> str | None:
        return self.milestones.get(status)


SELL_STATUS_GRAPH = StatusGraph(
    kind=OrderKind.SELL,
    initial_status=SellOrderStatus.PENDING.value,
    transitions={
        "pending": ("confirmed", "cancelled"),
        "confirmed": ("in_transit", "cancelled"),
        "in_transit": ("delivered", "cancelled"),
        "delivered": (),  # Terminal state
        "cancelled": (),  # Terminal state
    },
    milestones={
        "confirmed": "confirmed_at",
        "in_transit": "shipped_at",
        "delivered": "delivered_at",
        "cancelled": "cancelled_at",
    },
)

PURCHASE_STATUS_GRAPH = StatusGraph(
    kind=OrderKind.BUY,
    initial_status=PurchaseOrderStatus.DRAFT.value,
    transitions={
        "draft": ("ordered", "cancelled"),
        "ordered": ("received", "cancelled"),
        "received": (),  # Terminal state
        "cancelled": (),  # Terminal state
    },
    milestones={
        "ordered": "ordered_at",
        "received": "received_at",
        "cancelled": "cancelled_at",
    },
)

_GRAPHS: dict[OrderKind, StatusGraph] = {
    OrderKind.SELL: SELL_STATUS_GRAPH,
    OrderKind.BUY: PURCHASE_STATUS_GRAPH,
}


def get_status_graph(kind: OrderKind | str) -> StatusGraph:
    """Return the graph for an order kind."""
    return _GRAPHS[OrderKind(kind)]
