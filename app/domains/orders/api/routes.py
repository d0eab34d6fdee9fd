"""
Orders API Routes

FastAPI router for order status endpoints.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from app.domains.orders.api.dependencies import (
    get_allowed_transitions_use_case,
    get_bulk_transition_coordinator,
    get_tenant_id,
    get_transition_order_status_use_case,
    get_view_cache_invalidator,
)
from app.domains.orders.api.schemas import (
    AllowedTransitionsResponse,
    BulkTransitionRequest,
    BulkTransitionResponse,
    TransitionResultResponse,
    TransitionStatusRequest,
)
from app.domains.orders.application.dto import (
    BulkTransitionOrdersRequest,
    GetAllowedTransitionsRequest,
    TransitionContext,
    TransitionErrorKind,
    TransitionOrderStatusRequest,
    TransitionResult,
)
from app.domains.orders.application.ports import IViewCacheInvalidator
from app.domains.orders.application.use_cases import (
    BulkTransitionCoordinator,
    GetAllowedTransitionsUseCase,
    TransitionOrderStatusUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])

ERROR_STATUS_CODES: dict[TransitionErrorKind, int] = {
    TransitionErrorKind.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    TransitionErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    TransitionErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    TransitionErrorKind.TRANSIENT: status.HTTP_503_SERVICE_UNAVAILABLE,
    TransitionErrorKind.PERMANENT: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _context(tenant_id: UUID, request: TransitionStatusRequest) -> TransitionContext:
    return TransitionContext(
        tenant_id=tenant_id,
        performed_by=request.performed_by,
        cancellation_reason=request.cancellation_reason,
        notes=request.notes,
    )


def _raise_for_failure(result: TransitionResult) -> None:
    if result.success:
        return
    status_code = ERROR_STATUS_CODES.get(result.error_kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(status_code=status_code, detail=result.error or "Status change failed")


@router.get("/{order_id}/transitions", response_model=AllowedTransitionsResponse)
async def get_allowed_transitions(
    order_id: UUID,
    tenant_id: UUID = Depends(get_tenant_id),
    use_case: GetAllowedTransitionsUseCase = Depends(get_allowed_transitions_use_case),
):
    """Get the current status of an order and where it may move next."""
    result = await use_case.execute(GetAllowedTransitionsRequest(order_id=order_id, tenant_id=tenant_id))
    if not result.found:
        status_code = ERROR_STATUS_CODES.get(result.error_kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
        raise HTTPException(status_code=status_code, detail=result.error or "Order could not be loaded")
    return AllowedTransitionsResponse(
        order_id=result.order_id,
        kind=result.kind,
        status=result.status,
        allowed_transitions=result.allowed_transitions,
        restriction_message=result.restriction_message,
    )


@router.post("/{order_id}/status", response_model=TransitionResultResponse)
async def transition_order_status(
    order_id: UUID,
    request: TransitionStatusRequest,
    tenant_id: UUID = Depends(get_tenant_id),
    use_case: TransitionOrderStatusUseCase = Depends(get_transition_order_status_use_case),
    cache: IViewCacheInvalidator = Depends(get_view_cache_invalidator),
):
    """Move one order to a new status, reconciling stock where the status requires it."""
    result = await use_case.execute(
        TransitionOrderStatusRequest(
            order_id=order_id,
            target_status=request.status,
            context=_context(tenant_id, request),
        )
    )
    _raise_for_failure(result)

    if not result.already_applied or result.adjustments:
        await cache.invalidate(tenant_id)
    return TransitionResultResponse.model_validate(result.to_dict())


@router.post("/status/bulk", response_model=BulkTransitionResponse)
async def bulk_transition_order_status(
    request: BulkTransitionRequest,
    tenant_id: UUID = Depends(get_tenant_id),
    coordinator: BulkTransitionCoordinator = Depends(get_bulk_transition_coordinator),
    cache: IViewCacheInvalidator = Depends(get_view_cache_invalidator),
):
    """Move many orders to the same status. Per-order failures do not stop the batch."""
    aggregate = await coordinator.execute(
        BulkTransitionOrdersRequest(
            order_ids=request.order_ids,
            target_status=request.status,
            context=_context(tenant_id, request),
        )
    )
    if aggregate.success_count:
        await cache.invalidate(tenant_id)
    return BulkTransitionResponse.model_validate(aggregate.to_dict())


__all__ = ["router"]
