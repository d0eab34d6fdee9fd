"""
Orders API Dependencies

FastAPI dependencies for the orders domain.
"""

from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import DependencyContainer, get_container
from app.database.async_db import get_async_db
from app.domains.orders.application.ports import IViewCacheInvalidator
from app.domains.orders.application.use_cases import (
    BulkTransitionCoordinator,
    GetAllowedTransitionsUseCase,
    TransitionOrderStatusUseCase,
)


def get_tenant_id(x_tenant_id: str = Header(..., alias="X-Tenant-ID")) -> UUID:
    """Tenant the request acts for. Required on every orders endpoint."""
    try:
        return UUID(x_tenant_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Tenant-ID header must be a valid UUID",
        ) from e


def get_transition_order_status_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: DependencyContainer = Depends(get_container),
) -> TransitionOrderStatusUseCase:
    """Get TransitionOrderStatusUseCase instance."""
    return container.create_transition_order_status_use_case(db)


def get_bulk_transition_coordinator(
    db: AsyncSession = Depends(get_async_db),
    container: DependencyContainer = Depends(get_container),
) -> BulkTransitionCoordinator:
    """Get BulkTransitionCoordinator instance."""
    return container.create_bulk_transition_coordinator(db)


def get_allowed_transitions_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: DependencyContainer = Depends(get_container),
) -> GetAllowedTransitionsUseCase:
    """Get GetAllowedTransitionsUseCase instance."""
    return container.create_get_allowed_transitions_use_case(db)


def get_view_cache_invalidator(
    container: DependencyContainer = Depends(get_container),
) -> IViewCacheInvalidator:
    return container.create_view_cache_invalidator()


__all__ = [
    "get_tenant_id",
    "get_transition_order_status_use_case",
    "get_bulk_transition_coordinator",
    "get_allowed_transitions_use_case",
    "get_view_cache_invalidator",
]
