"""
Orders Use Cases

Application layer use cases for the order lifecycle.
"""

from app.domains.orders.application.use_cases.bulk_transition_orders import BulkTransitionCoordinator
from app.domains.orders.application.use_cases.get_allowed_transitions import GetAllowedTransitionsUseCase
from app.domains.orders.application.use_cases.transition_order_status import (
    TransitionExecutor,
    TransitionOrderStatusUseCase,
)

__all__ = [
    "BulkTransitionCoordinator",
    "GetAllowedTransitionsUseCase",
    "TransitionExecutor",
    "TransitionOrderStatusUseCase",
]
