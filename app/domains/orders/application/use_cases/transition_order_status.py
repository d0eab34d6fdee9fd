"""
Transition Order Status Use Case

Moves one order to a new status and applies the stock side effects the
move implies.
"""

import logging
from datetime import UTC, datetime
from typing import Callable
from uuid import UUID

from app.core.shared.logger import ContextLogger, get_service_logger
from app.domains.orders.application.dto import (
    StockAdjustment,
    TransitionContext,
    TransitionErrorKind,
    TransitionOrderStatusRequest,
    TransitionResult,
)
from app.domains.orders.application.ports import IOrderRepository
from app.domains.orders.application.services import AuditLogWriter, InventorySynchronizer, RetryPolicy
from app.domains.orders.domain.entities import InventoryHistoryEntry, Order, OrderItem
from app.domains.orders.domain.services import EditabilityGuard, ReconciliationRule, reconciliation_for
from app.domains.orders.domain.value_objects import CANCELLED

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TransitionExecutor:
    """
    Performs one status change attempt for one order.

    Steps run strictly in order: tenant-scoped read, guard, conditional
    status write, stock writes, ledger writes. Expected failures come back
    as failed results. Errors from the read or the status write propagate
    so that RetryPolicy can decide whether to try again. Once the status
    write has landed, stock or ledger problems only add warnings.

    ``on_status_write`` is called just before the conditional status
    write. When ``resume`` is set (a retry after an earlier attempt of the
    same request reached that write, which may have committed), an order
    already sitting in the target status gets its pending side effects
    finished instead of being refused. Ledger entries mark which items were
    already applied, so nothing moves twice. Without ``resume`` every
    attempt goes through the guard.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        inventory_synchronizer: InventorySynchronizer,
        audit_log_writer: AuditLogWriter,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.order_repository = order_repository
        self.inventory_synchronizer = inventory_synchronizer
        self.audit_log_writer = audit_log_writer
        self._clock = clock
        self._logger = get_service_logger("order_transition")

    async def transition(
        self,
        order_id: UUID,
        target_status: str,
        context: TransitionContext,
        resume: bool = False,
        on_status_write: Callable[[], None] | None = None,
    ) -> TransitionResult:
        log = self._logger.with_context(tenant_id=context.tenant_id, order_id=order_id, target=target_status)

        if not context.tenant_id:
            log.warning("Transition refused: no tenant context")
            return TransitionResult.failure(order_id, "Tenant context required", TransitionErrorKind.VALIDATION)

        tenant_id = context.tenant_id
        order = await self.order_repository.get_by_id(order_id, tenant_id)
        if order is None:
            return TransitionResult.failure(order_id, "Order not found", TransitionErrorKind.NOT_FOUND)

        if resume and order.status == target_status:
            return await self._resume(order, context, log)

        decision = EditabilityGuard.for_kind(order.kind).evaluate(order.status, target_status)
        if not decision.allowed:
            log.info(f"Transition refused: {decision.reason}")
            return TransitionResult.failure(
                order_id, decision.reason or "Transition not allowed", TransitionErrorKind.VALIDATION, status=order.status
            )

        if decision.already_applied:
            return TransitionResult(
                success=True,
                order_id=order_id,
                status=order.status,
                previous_status=order.status,
                already_applied=True,
            )

        reason = (context.cancellation_reason or "").strip() or None
        if target_status == CANCELLED and reason is None:
            return TransitionResult.failure(
                order_id, "Cancellation reason is required", TransitionErrorKind.VALIDATION, status=order.status
            )

        changed_at = self._clock()
        if on_status_write is not None:
            on_status_write()
        written = await self.order_repository.update_status(
            order_id,
            tenant_id,
            expected_status=order.status,
            new_status=target_status,
            changed_at=changed_at,
            milestone_field=order.graph.milestone_field(target_status),
            cancellation_reason=reason if target_status == CANCELLED else None,
        )
        if not written:
            log.warning(f"Status write lost: order left '{order.status}' before the update")
            return TransitionResult.failure(
                order_id,
                "Order was modified by another user; reload and try again",
                TransitionErrorKind.CONFLICT,
                status=order.status,
            )

        previous_status = order.apply_status(target_status, at=changed_at, cancellation_reason=reason)
        log.info(f"Order {order.order_number}: {previous_status} -> {target_status}")

        adjustments, warnings = await self._reconcile(order, context, log)
        return TransitionResult(
            success=True,
            order_id=order_id,
            status=order.status,
            previous_status=previous_status,
            warnings=warnings,
            adjustments=adjustments,
        )

    async def _resume(self, order: Order, context: TransitionContext, log: ContextLogger) -> TransitionResult:
        log.info("Order already in target status on retry; completing side effects")
        adjustments, warnings = await self._reconcile(order, context, log)
        return TransitionResult(
            success=True,
            order_id=order.id,
            status=order.status,
            previous_status=None,
            already_applied=True,
            warnings=warnings,
            adjustments=adjustments,
        )

    async def _reconcile(
        self,
        order: Order,
        context: TransitionContext,
        log: ContextLogger,
    ) -> tuple[list[StockAdjustment], list[str]]:
        rule = reconciliation_for(order.kind, order.status)
        if rule is None or not order.items:
            return [], []

        adjustments: list[StockAdjustment] = []
        warnings: list[str] = []

        try:
            applied = await self.audit_log_writer.applied_item_ids(
                order.tenant_id, rule.reference_type.value, str(order.id)
            )
        except Exception as e:
            log.error(f"Could not read inventory history before reconciliation: {e}")
            return [], ["Status updated but inventory reconciliation could not run; adjust stock manually"]

        for item in order.items:
            if not item.moves_stock:
                log.info(f"Skipping line '{item.product_name}': no product linked or nothing to move")
                continue
            if str(item.id) in applied:
                log.info(f"Skipping line '{item.product_name}': already reconciled")
                continue

            try:
                adjustment = await self.inventory_synchronizer.apply(
                    item.product_id, order.tenant_id, item.quantity, rule.mode
                )
            except Exception as e:
                log.error(f"Stock update failed for product {item.product_id}: {e}")
                warnings.append(
                    f"Status updated but inventory reconciliation failed for product "
                    f"'{item.product_name}'; adjust manually"
                )
                continue

            if adjustment is None:
                log.info(f"Skipping line '{item.product_name}': product {item.product_id} no longer exists")
                continue

            adjustments.append(adjustment)
            entry = self._history_entry(order, item, rule, adjustment, context)
            if await self.audit_log_writer.record(entry) is None:
                warnings.append(
                    f"Stock for '{item.product_name}' was updated but its history entry could not be written"
                )

        return adjustments, warnings

    def _history_entry(
        self,
        order: Order,
        item: OrderItem,
        rule: ReconciliationRule,
        adjustment: StockAdjustment,
        context: TransitionContext,
    ) -> InventoryHistoryEntry:
        notes = rule.notes_for(order)
        if context.notes:
            notes = f"{notes}. {context.notes}"
        return InventoryHistoryEntry(
            tenant_id=order.tenant_id,
            product_id=item.product_id,
            change_type=rule.change_type.value,
            previous_quantity=adjustment.previous_quantity,
            new_quantity=adjustment.new_quantity,
            change_amount=adjustment.change_amount,
            reference_type=rule.reference_type.value,
            reference_id=str(order.id),
            reason=rule.reason,
            notes=notes,
            performed_by=context.performed_by,
            metadata=rule.metadata_for(order, item),
        )


class TransitionOrderStatusUseCase:
    """
    Use Case: Transition Order Status

    Runs TransitionExecutor under RetryPolicy. Always returns a
    TransitionResult.

    A retry resumes side effects only when an earlier attempt reached the
    status write; a failure before that point is retried from scratch,
    guard included.
    """

    def __init__(self, executor: TransitionExecutor, retry_policy: RetryPolicy):
        self.executor = executor
        self.retry_policy = retry_policy

    async def execute(self, request: TransitionOrderStatusRequest) -> TransitionResult:
        write_started = False

        def mark_write_started() -> None:
            nonlocal write_started
            write_started = True

        async def attempt(number: int) -> TransitionResult:
            return await self.executor.transition(
                request.order_id,
                request.target_status,
                request.context,
                resume=write_started,
                on_status_write=mark_write_started,
            )

        result = await self.retry_policy.run(attempt, request.order_id)
        if not result.success:
            logger.info(f"Order {request.order_id} -> {request.target_status} failed: {result.error}")
        return result


__all__ = ["TransitionExecutor", "TransitionOrderStatusUseCase"]
