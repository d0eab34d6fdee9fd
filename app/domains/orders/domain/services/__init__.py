"""
Orders Domain Services
"""

from app.domains.orders.domain.services.editability_guard import (
    RESTRICTION_MESSAGES,
    EditabilityGuard,
    GuardDecision,
)
from app.domains.orders.domain.services.reconciliation_policy import (
    ReconciliationRule,
    StockMode,
    compute_new_quantity,
    reconciliation_for,
)

__all__ = [
    "EditabilityGuard",
    "GuardDecision",
    "RESTRICTION_MESSAGES",
    "ReconciliationRule",
    "StockMode",
    "compute_new_quantity",
    "reconciliation_for",
]
