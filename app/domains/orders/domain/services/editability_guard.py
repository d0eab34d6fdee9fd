"""
Editability Guard

Decides whether an order in a given status may change, and why not.
Pure in-memory logic over the kind's StatusGraph.
"""

from dataclasses import dataclass

from ..value_objects.order_status import OrderKind, StatusGraph, get_status_graph

RESTRICTION_MESSAGES: dict[tuple[OrderKind, str], str] = {
    (OrderKind.SELL, "delivered"): "Delivered orders cannot be modified",
    (OrderKind.SELL, "cancelled"): "Cancelled orders cannot be modified",
    (OrderKind.BUY, "received"): "Received purchase orders cannot be modified",
    (OrderKind.BUY, "cancelled"): "Cancelled orders cannot be modified",
}


@dataclass(frozen=True)
class GuardDecision:
    """Outcome of checking one requested move."""

    allowed: bool
    already_applied: bool = False
    locked: bool = False
    reason: str | None = None


class EditabilityGuard:
    """
    Gatekeeper for status changes of one order kind.

    Checks run in a fixed order: unknown target, locked current status,
    same-status no-op, then the graph. A cancelled order asked to become
    cancelled again is therefore refused, not treated as a no-op.
    """

    def __init__(self, graph: StatusGraph):
        self.graph = graph

    @classmethod
    def for_kind(cls, kind: OrderKind | str) -> "EditabilityGuard":
        return cls(get_status_graph(kind))

    def can_edit(self, current: str) -> bool:
        return self.graph.is_known(current) and not self.graph.is_terminal(current)

    def can_change_status(self, current: str, target: str) -> bool:
        return self.graph.can_change_status(current, target)

    def get_allowed_transitions(self, current: str) -> list[str]:
        return self.graph.successors(current)

    def get_edit_restriction_message(self, current: str) -> str | None:
        """Message for a status nothing can leave, else None."""
        if not self.graph.is_terminal(current):
            return None
        return RESTRICTION_MESSAGES.get(
            (self.graph.kind, current),
            f"{current.replace('_', ' ').capitalize()} orders cannot be modified",
        )

    def evaluate(self, current: str, target: str) -> GuardDecision:
        if not self.graph.is_known(target):
            valid = ", ".join(self.graph.statuses)
            return GuardDecision(
                allowed=False,
                reason=f"Invalid status '{target}' for {self.graph.kind.value} orders. Valid: {valid}",
            )

        restriction = self.get_edit_restriction_message(current)
        if restriction:
            return GuardDecision(allowed=False, locked=True, reason=restriction)

        if target == current:
            return GuardDecision(allowed=True, already_applied=True)

        if not self.graph.can_change_status(current, target):
            return GuardDecision(
                allowed=False,
                reason=f"Cannot change status from '{current}' to '{target}'",
            )

        return GuardDecision(allowed=True)
