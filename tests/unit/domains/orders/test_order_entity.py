"""
Unit tests for the Order aggregate and the reconciliation policy.
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from app.core.domain import InvalidOperationException, ValidationException
from app.domains.orders.domain.entities import ChangeType, Order, OrderItem, ReferenceType
from app.domains.orders.domain.services import StockMode, compute_new_quantity, reconciliation_for
from app.domains.orders.domain.services.reconciliation_policy import SOURCE
from app.domains.orders.domain.value_objects import OrderKind
from tests.utils import OrderBuilder, OrderItemBuilder

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


@pytest.mark.unit
class TestOrder:
    def test_create_starts_in_initial_status(self):
        items = [OrderItem(product_name="Apples", quantity=2, unit_price=3.0)]
        order = Order.create(uuid4(), OrderKind.SELL, "SO-1", items)

        assert order.status == "pending"
        assert float(order.total_amount.amount) == 6.0
        assert Order.create(uuid4(), OrderKind.BUY, "PO-1").status == "draft"

    def test_apply_status_sets_milestone(self):
        order = OrderBuilder().build()

        previous = order.apply_status("confirmed", at=T0)

        assert previous == "pending"
        assert order.status == "confirmed"
        assert order.confirmed_at == T0
        assert order.version == 1

    def test_milestone_is_never_overwritten(self):
        order = OrderBuilder().in_status("pending").with_milestone("confirmed_at", T0).build()

        order.apply_status("confirmed", at=T0 + timedelta(days=1))

        assert order.confirmed_at == T0

    def test_same_status_is_a_no_op(self):
        order = OrderBuilder().in_status("confirmed").build()

        assert order.apply_status("confirmed", at=T0) == "confirmed"
        assert order.confirmed_at is None
        assert order.version == 0

    def test_cancel_requires_reason(self):
        order = OrderBuilder().build()

        with pytest.raises(ValidationException):
            order.apply_status("cancelled", at=T0, cancellation_reason="   ")

    def test_cancel_records_reason_and_timestamp(self):
        order = OrderBuilder().in_status("confirmed").build()

        order.apply_status("cancelled", at=T0, cancellation_reason=" customer request ")

        assert order.cancellation_reason == "customer request"
        assert order.cancelled_at == T0
        assert order.is_cancelled
        assert order.is_locked

    def test_illegal_move_raises(self):
        order = OrderBuilder().build()

        with pytest.raises(InvalidOperationException):
            order.apply_status("delivered")

    def test_unknown_status_raises(self):
        order = OrderBuilder.purchase().build()

        with pytest.raises(ValidationException):
            order.apply_status("in_transit")

    def test_milestone_lookup(self):
        order = OrderBuilder().in_status("in_transit").with_milestone("shipped_at", T0).build()

        assert order.milestone("in_transit") == T0
        assert order.milestone("pending") is None

    def test_item_moves_stock(self):
        assert OrderItemBuilder().build().moves_stock
        assert not OrderItemBuilder().without_product().build().moves_stock
        assert not OrderItemBuilder().with_quantity(0).build().moves_stock

    def test_to_dict(self):
        order = OrderBuilder().with_item(uuid4(), 2.0).build()

        data = order.to_dict()

        assert data["kind"] == "sell"
        assert data["status"] == "pending"
        assert data["items"][0]["quantity_unit"] == "lb"
        assert data["delivered_at"] is None


@pytest.mark.unit
class TestReconciliationPolicy:
    def test_sell_cancel_restores(self):
        rule = reconciliation_for(OrderKind.SELL, "cancelled")

        assert rule.mode is StockMode.RESTORE
        assert rule.change_type is ChangeType.RETURN
        assert rule.reference_type is ReferenceType.ORDER_CANCELLED

    def test_sell_delivery_deducts(self):
        rule = reconciliation_for(OrderKind.SELL, "delivered")

        assert rule.mode is StockMode.DEDUCT
        assert rule.change_type is ChangeType.SALE
        assert rule.reference_type is ReferenceType.ORDER_DELIVERED

    def test_purchase_receipt_adds_stock(self):
        rule = reconciliation_for("buy", "received")

        assert rule.mode is StockMode.RESTORE
        assert rule.change_type is ChangeType.STOCK_IN
        assert rule.reason == "restock"

    @pytest.mark.parametrize(
        "kind,status",
        [
            (OrderKind.SELL, "confirmed"),
            (OrderKind.SELL, "in_transit"),
            (OrderKind.BUY, "ordered"),
            (OrderKind.BUY, "cancelled"),
        ],
    )
    def test_statuses_without_stock_movement(self, kind, status):
        assert reconciliation_for(kind, status) is None

    def test_compute_new_quantity(self):
        assert compute_new_quantity(10, 5, StockMode.RESTORE) == 15
        assert compute_new_quantity(10, 4, StockMode.DEDUCT) == 6
        assert compute_new_quantity(3, 5, StockMode.DEDUCT) == 0
        assert compute_new_quantity(3, -5, StockMode.DEDUCT) == 0
        assert compute_new_quantity(0, 2.5, StockMode.RESTORE) == 2.5

    def test_cancellation_metadata(self):
        item = OrderItemBuilder().build()
        order = OrderBuilder().with_items(item).with_cancellation_reason("damaged").build()

        metadata = reconciliation_for(OrderKind.SELL, "cancelled").metadata_for(order, item)

        assert metadata["order_id"] == str(order.id)
        assert metadata["order_item_id"] == str(item.id)
        assert metadata["source"] == SOURCE
        assert metadata["cancellation_reason"] == "damaged"

    def test_delivery_metadata_has_no_cancellation_reason(self):
        item = OrderItemBuilder().build()
        order = OrderBuilder().with_items(item).build()

        metadata = reconciliation_for(OrderKind.SELL, "delivered").metadata_for(order, item)

        assert "cancellation_reason" not in metadata

    def test_notes(self):
        order = OrderBuilder().numbered("SO-77").build()

        assert reconciliation_for(OrderKind.SELL, "cancelled").notes_for(order) == "Order cancelled - inventory restored"
        assert reconciliation_for(OrderKind.SELL, "delivered").notes_for(order) == (
            "Order SO-77 delivered - inventory deducted"
        )
