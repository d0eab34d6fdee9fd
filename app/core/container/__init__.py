# ============================================================================
# SCOPE: GLOBAL
# Description: Main dependency injection container (singleton).
#              Composes the domain sub-containers.
# Tenant-Aware: No - tenant ids are passed explicitly on every call.
# ============================================================================
"""
Dependency Injection Container.

Centralized container for creating and managing all application dependencies.
Wires concrete implementations to the application ports.
"""

from __future__ import annotations

import logging

from app.config.settings import Settings

from .base import BaseContainer
from .orders import OrdersContainer

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency Injection Container (Facade).

    Single Responsibility: Compose and delegate to domain-specific containers.
    """

    def __init__(self, settings: Settings | None = None):
        self._base = BaseContainer(settings)
        self._orders = OrdersContainer(self._base)

        logger.info("DependencyContainer initialized")

    @property
    def settings(self) -> Settings:
        return self._base.settings

    @property
    def orders(self) -> OrdersContainer:
        return self._orders

    async def close(self) -> None:
        await self._base.close()

    # ============================================================
    # ORDERS (delegated to OrdersContainer)
    # ============================================================

    def create_transition_order_status_use_case(self, db):
        return self._orders.create_transition_order_status_use_case(db)

    def create_bulk_transition_coordinator(self, db):
        return self._orders.create_bulk_transition_coordinator(db)

    def create_get_allowed_transitions_use_case(self, db):
        return self._orders.create_get_allowed_transitions_use_case(db)

    def create_view_cache_invalidator(self):
        return self._orders.create_view_cache_invalidator()


_container: DependencyContainer | None = None


def get_container() -> DependencyContainer:
    """Process-wide container."""
    global _container
    if _container is None:
        _container = DependencyContainer()
    return _container


def reset_container() -> None:
    global _container
    _container = None


__all__ = [
    "BaseContainer",
    "DependencyContainer",
    "OrdersContainer",
    "get_container",
    "reset_container",
]
