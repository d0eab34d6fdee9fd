"""
Bulk Transition Orders Use Case

Applies one target status to many orders, one after another.
"""

import logging
from uuid import UUID

from app.domains.orders.application.dto import (
    BulkTransitionOrdersRequest,
    BulkTransitionResult,
    TransitionContext,
    TransitionErrorKind,
    TransitionOrderStatusRequest,
    TransitionResult,
)
from app.domains.orders.application.use_cases.transition_order_status import TransitionOrderStatusUseCase

logger = logging.getLogger(__name__)


class BulkTransitionCoordinator:
    """
    Use Case: Bulk Transition Orders

    Orders are processed sequentially in input order, each through the
    retrying single-order use case. A failure is recorded and the loop moves
    on; there is no batch atomicity and no cross-order locking. Repeated ids
    are processed once.
    """

    def __init__(self, transition_use_case: TransitionOrderStatusUseCase):
        self.transition_use_case = transition_use_case

    async def apply_to_many(
        self,
        order_ids: list[UUID],
        target_status: str,
        context: TransitionContext,
    ) -> BulkTransitionResult:
        aggregate = BulkTransitionResult()

        for order_id in dict.fromkeys(order_ids):
            try:
                result = await self.transition_use_case.execute(
                    TransitionOrderStatusRequest(order_id=order_id, target_status=target_status, context=context)
                )
            except Exception as e:
                logger.error(f"Unexpected error moving order {order_id} to {target_status}: {e}")
                result = TransitionResult.failure(order_id, str(e), TransitionErrorKind.PERMANENT)
            aggregate.add(result)

        logger.info(f"Bulk transition to '{target_status}' for tenant {context.tenant_id}: {aggregate.summary}")
        return aggregate

    async def execute(self, request: BulkTransitionOrdersRequest) -> BulkTransitionResult:
        return await self.apply_to_many(request.order_ids, request.target_status, request.context)


__all__ = ["BulkTransitionCoordinator"]
