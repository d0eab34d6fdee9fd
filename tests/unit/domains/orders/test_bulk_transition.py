"""
Unit tests for BulkTransitionCoordinator and the bulk result fold.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.domains.orders.application.dto import (
    BulkTransitionOrdersRequest,
    BulkTransitionResult,
    TransitionErrorKind,
    TransitionResult,
)
from app.domains.orders.application.services import AuditLogWriter, InventorySynchronizer, RetryPolicy
from app.domains.orders.application.use_cases import (
    BulkTransitionCoordinator,
    TransitionExecutor,
    TransitionOrderStatusUseCase,
)
from tests.utils import (
    InMemoryInventoryHistoryRepository,
    InMemoryOrderRepository,
    InMemoryProductStockRepository,
    OrderBuilder,
    create_transition_context,
)


def _coordinator(*orders) -> BulkTransitionCoordinator:
    executor = TransitionExecutor(
        order_repository=InMemoryOrderRepository(*orders),
        inventory_synchronizer=InventorySynchronizer(InMemoryProductStockRepository()),
        audit_log_writer=AuditLogWriter(InMemoryInventoryHistoryRepository()),
    )
    return BulkTransitionCoordinator(TransitionOrderStatusUseCase(executor, RetryPolicy(sleep=AsyncMock())))


@pytest.mark.unit
class TestBulkTransitionResult:
    def test_fold_counts_and_summary(self):
        aggregate = BulkTransitionResult()
        ok_id, bad_id = uuid4(), uuid4()

        aggregate.add(TransitionResult(success=True, order_id=ok_id, status="confirmed"))
        aggregate.add(TransitionResult.failure(bad_id, "Order not found", TransitionErrorKind.NOT_FOUND))

        assert aggregate.success_count == 1
        assert aggregate.fail_count == 1
        assert aggregate.summary == "1 orders updated, 1 failed"
        data = aggregate.to_dict()
        assert data["failures"] == [{"order_id": str(bad_id), "reason": "Order not found", "error_kind": "not_found"}]
        assert data["results"][0]["order_id"] == str(ok_id)

    def test_empty_fold(self):
        assert BulkTransitionResult().summary == "0 orders updated, 0 failed"


@pytest.mark.unit
class TestBulkTransitionCoordinator:
    async def test_mixed_batch(self):
        tenant_id = uuid4()
        a = OrderBuilder().for_tenant(tenant_id).numbered("A").build()
        b = OrderBuilder().for_tenant(tenant_id).numbered("B").in_status("cancelled").build()
        c = OrderBuilder().for_tenant(tenant_id).numbered("C").build()

        aggregate = await _coordinator(a, b, c).apply_to_many(
            [a.id, b.id, c.id], "confirmed", create_transition_context(tenant_id=tenant_id)
        )

        assert aggregate.success_count == 2
        assert aggregate.fail_count == 1
        assert aggregate.failures[0].order_id == b.id
        assert aggregate.failures[0].reason == "Cancelled orders cannot be modified"
        assert aggregate.failures[0].error_kind is TransitionErrorKind.VALIDATION
        assert [result.order_id for result in aggregate.successes] == [a.id, c.id]

    async def test_duplicate_ids_are_processed_once(self):
        tenant_id = uuid4()
        order = OrderBuilder().for_tenant(tenant_id).build()

        aggregate = await _coordinator(order).apply_to_many(
            [order.id, order.id], "confirmed", create_transition_context(tenant_id=tenant_id)
        )

        assert aggregate.success_count == 1
        assert aggregate.fail_count == 0

    async def test_unexpected_exception_is_folded(self):
        use_case = AsyncMock()
        use_case.execute = AsyncMock(side_effect=RuntimeError("kaboom"))
        order_id = uuid4()

        aggregate = await BulkTransitionCoordinator(use_case).apply_to_many(
            [order_id], "confirmed", create_transition_context()
        )

        assert aggregate.fail_count == 1
        assert aggregate.failures[0].reason == "kaboom"
        assert aggregate.failures[0].error_kind is TransitionErrorKind.PERMANENT

    async def test_execute_delegates(self):
        tenant_id = uuid4()
        order = OrderBuilder().for_tenant(tenant_id).build()

        aggregate = await _coordinator(order).execute(
            BulkTransitionOrdersRequest(
                order_ids=[order.id], target_status="confirmed", context=create_transition_context(tenant_id=tenant_id)
            )
        )

        assert aggregate.summary == "1 orders updated, 0 failed"
