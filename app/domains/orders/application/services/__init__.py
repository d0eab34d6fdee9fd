"""
Orders Application Services

Collaborators of the transition use cases.
"""

from app.domains.orders.application.services.audit_log_writer import AuditLogWriter
from app.domains.orders.application.services.inventory_synchronizer import InventorySynchronizer
from app.domains.orders.application.services.retry_policy import (
    RetryPolicy,
    classify_transition_failure,
    error_kind_for,
)

__all__ = [
    "AuditLogWriter",
    "InventorySynchronizer",
    "RetryPolicy",
    "classify_transition_failure",
    "error_kind_for",
]
