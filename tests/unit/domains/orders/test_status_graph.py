"""
Unit tests for the status graphs and the editability guard.
"""

import pytest

from app.domains.orders.domain.services import RESTRICTION_MESSAGES, EditabilityGuard
from app.domains.orders.domain.value_objects import (
    PURCHASE_STATUS_GRAPH,
    SELL_STATUS_GRAPH,
    OrderKind,
    get_status_graph,
)


@pytest.mark.unit
class TestStatusGraph:
    def test_sell_graph_successors(self):
        assert SELL_STATUS_GRAPH.successors("pending") == ["confirmed", "cancelled"]
        assert SELL_STATUS_GRAPH.successors("confirmed") == ["in_transit", "cancelled"]
        assert SELL_STATUS_GRAPH.successors("in_transit") == ["delivered", "cancelled"]
        assert SELL_STATUS_GRAPH.successors("delivered") == []
        assert SELL_STATUS_GRAPH.successors("cancelled") == []

    def test_purchase_graph_successors(self):
        assert PURCHASE_STATUS_GRAPH.successors("draft") == ["ordered", "cancelled"]
        assert PURCHASE_STATUS_GRAPH.successors("ordered") == ["received", "cancelled"]
        assert PURCHASE_STATUS_GRAPH.successors("received") == []

    def test_initial_statuses(self):
        assert get_status_graph(OrderKind.SELL).initial_status == "pending"
        assert get_status_graph("buy").initial_status == "draft"

    @pytest.mark.parametrize(
        "current,target,expected",
        [
            ("pending", "confirmed", True),
            ("pending", "in_transit", False),
            ("pending", "delivered", False),
            ("confirmed", "confirmed", True),
            ("in_transit", "pending", False),
            ("delivered", "cancelled", False),
            ("cancelled", "pending", False),
            ("pending", "shipped", False),
        ],
    )
    def test_can_change_status(self, current, target, expected):
        assert SELL_STATUS_GRAPH.can_change_status(current, target) is expected

    def test_unknown_current_status_is_never_allowed(self):
        assert SELL_STATUS_GRAPH.can_change_status("draft", "confirmed") is False

    def test_terminal_statuses(self):
        assert SELL_STATUS_GRAPH.is_terminal("delivered")
        assert SELL_STATUS_GRAPH.is_terminal("cancelled")
        assert not SELL_STATUS_GRAPH.is_terminal("pending")
        assert not SELL_STATUS_GRAPH.is_terminal("nonsense")

    def test_every_non_terminal_status_can_cancel(self):
        for graph in (SELL_STATUS_GRAPH, PURCHASE_STATUS_GRAPH):
            for status in graph.statuses:
                if not graph.is_terminal(status):
                    assert "cancelled" in graph.successors(status)

    def test_milestone_fields(self):
        assert SELL_STATUS_GRAPH.milestone_field("in_transit") == "shipped_at"
        assert SELL_STATUS_GRAPH.milestone_field("pending") is None
        assert PURCHASE_STATUS_GRAPH.milestone_field("received") == "received_at"


@pytest.mark.unit
class TestEditabilityGuard:
    def test_allowed_transitions(self):
        guard = EditabilityGuard.for_kind(OrderKind.SELL)

        assert guard.get_allowed_transitions("pending") == ["confirmed", "cancelled"]
        assert guard.get_allowed_transitions("delivered") == []

    def test_restriction_messages(self):
        sell = EditabilityGuard.for_kind(OrderKind.SELL)
        buy = EditabilityGuard.for_kind(OrderKind.BUY)

        assert sell.get_edit_restriction_message("delivered") == "Delivered orders cannot be modified"
        assert sell.get_edit_restriction_message("cancelled") == "Cancelled orders cannot be modified"
        assert buy.get_edit_restriction_message("received") == "Received purchase orders cannot be modified"
        assert sell.get_edit_restriction_message("pending") is None
        assert len(RESTRICTION_MESSAGES) == 4

    def test_can_edit(self):
        guard = EditabilityGuard.for_kind(OrderKind.BUY)

        assert guard.can_edit("draft")
        assert guard.can_edit("ordered")
        assert not guard.can_edit("received")
        assert not guard.can_edit("cancelled")

    def test_evaluate_allows_successor(self):
        decision = EditabilityGuard.for_kind(OrderKind.SELL).evaluate("pending", "confirmed")

        assert decision.allowed
        assert not decision.already_applied

    def test_evaluate_same_status_is_no_op(self):
        decision = EditabilityGuard.for_kind(OrderKind.SELL).evaluate("confirmed", "confirmed")

        assert decision.allowed
        assert decision.already_applied

    def test_evaluate_cancelled_to_anything_is_refused_with_restriction(self):
        guard = EditabilityGuard.for_kind(OrderKind.SELL)

        for target in SELL_STATUS_GRAPH.statuses:
            decision = guard.evaluate("cancelled", target)
            assert not decision.allowed
            assert decision.locked
            assert decision.reason == "Cancelled orders cannot be modified"

    def test_evaluate_skipping_a_step(self):
        decision = EditabilityGuard.for_kind(OrderKind.SELL).evaluate("pending", "delivered")

        assert not decision.allowed
        assert decision.reason == "Cannot change status from 'pending' to 'delivered'"

    def test_evaluate_unknown_target(self):
        decision = EditabilityGuard.for_kind(OrderKind.BUY).evaluate("draft", "in_transit")

        assert not decision.allowed
        assert decision.reason.startswith("Invalid status 'in_transit' for buy orders")
        assert "draft, ordered, received, cancelled" in decision.reason
