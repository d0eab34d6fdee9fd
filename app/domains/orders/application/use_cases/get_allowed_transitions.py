"""
Get Allowed Transitions Use Case

Reports an order's current status and the statuses it may move to.
"""

import logging

from app.domains.orders.application.dto import (
    GetAllowedTransitionsRequest,
    GetAllowedTransitionsResponse,
    TransitionErrorKind,
)
from app.domains.orders.application.ports import IOrderRepository
from app.domains.orders.application.services import error_kind_for
from app.domains.orders.domain.services import EditabilityGuard

logger = logging.getLogger(__name__)


class GetAllowedTransitionsUseCase:
    """
    Use Case: Get Allowed Transitions

    Read-only; used by clients to offer only legal status choices.
    """

    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, request: GetAllowedTransitionsRequest) -> GetAllowedTransitionsResponse:
        if not request.tenant_id:
            return GetAllowedTransitionsResponse(
                found=False,
                order_id=request.order_id,
                error="Tenant context required",
                error_kind=TransitionErrorKind.VALIDATION,
            )

        try:
            order = await self.order_repository.get_by_id(request.order_id, request.tenant_id)
        except Exception as e:
            logger.error(f"Error loading order {request.order_id}: {e}")
            return GetAllowedTransitionsResponse(
                found=False, order_id=request.order_id, error=str(e), error_kind=error_kind_for(e)
            )

        if order is None:
            return GetAllowedTransitionsResponse(
                found=False,
                order_id=request.order_id,
                error="Order not found",
                error_kind=TransitionErrorKind.NOT_FOUND,
            )

        guard = EditabilityGuard.for_kind(order.kind)
        return GetAllowedTransitionsResponse(
            found=True,
            order_id=request.order_id,
            kind=order.kind.value,
            status=order.status,
            allowed_transitions=guard.get_allowed_transitions(order.status),
            restriction_message=guard.get_edit_restriction_message(order.status),
        )


__all__ = ["GetAllowedTransitionsUseCase"]
