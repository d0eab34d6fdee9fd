"""
Orders Application DTOs

Data Transfer Objects for the Orders domain.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import UUID


class TransitionErrorKind(str, Enum):
    """Why a transition failed."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TRANSIENT = "transient"
    PERMANENT = "permanent"


# ==================== Transition DTOs ====================


@dataclass(frozen=True)
class TransitionContext:
    """Who is asking, for which tenant, and why."""

    tenant_id: UUID | None
    performed_by: str | None = None
    cancellation_reason: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class StockAdjustment:
    """One applied stock change."""

    product_id: UUID
    previous_quantity: float
    new_quantity: float
    change_amount: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": str(self.product_id),
            "previous_quantity": self.previous_quantity,
            "new_quantity": self.new_quantity,
            "change_amount": self.change_amount,
        }


@dataclass
class TransitionResult:
    """Outcome of one order's status change. Never persisted."""

    success: bool
    order_id: UUID
    status: str | None = None
    previous_status: str | None = None
    error: str | None = None
    error_kind: TransitionErrorKind | None = None
    warnings: list[str] = field(default_factory=list)
    already_applied: bool = False
    attempts: int = 1
    adjustments: list[StockAdjustment] = field(default_factory=list)

    @classmethod
    def failure(
        cls,
        order_id: UUID,
        error: str,
        error_kind: TransitionErrorKind,
        status: str | None = None,
        attempts: int = 1,
    ) -> "TransitionResult":
        return cls(
            success=False,
            order_id=order_id,
            status=status,
            error=error,
            error_kind=error_kind,
            attempts=attempts,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "order_id": str(self.order_id),
            "status": self.status,
            "previous_status": self.previous_status,
            "error": self.error,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "warnings": list(self.warnings),
            "already_applied": self.already_applied,
            "attempts": self.attempts,
            "adjustments": [adjustment.to_dict() for adjustment in self.adjustments],
        }


@dataclass
class TransitionOrderStatusRequest:
    """Request to move one order to a new status."""

    order_id: UUID
    target_status: str
    context: TransitionContext


# ==================== Bulk DTOs ====================


@dataclass(frozen=True)
class BulkFailure:
    """Order that could not be moved, with the reason."""

    order_id: UUID
    reason: str
    error_kind: TransitionErrorKind | None = None


@dataclass
class BulkTransitionOrdersRequest:
    """Request to move many orders to the same status."""

    order_ids: list[UUID]
    target_status: str
    context: TransitionContext


@dataclass
class BulkTransitionResult:
    """Per-order outcomes folded into one aggregate."""

    successes: list[TransitionResult] = field(default_factory=list)
    failures: list[BulkFailure] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.successes)

    @property
    def fail_count(self) -> int:
        return len(self.failures)

    @property
    def summary(self) -> str:
        return f"{self.success_count} orders updated, {self.fail_count} failed"

    def add(self, result: TransitionResult) -> None:
        if result.success:
            self.successes.append(result)
        else:
            self.failures.append(
                BulkFailure(
                    order_id=result.order_id,
                    reason=result.error or "Unknown error",
                    error_kind=result.error_kind,
                )
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "success_count": self.success_count,
            "fail_count": self.fail_count,
            "summary": self.summary,
            "failures": [
                {
                    "order_id": str(failure.order_id),
                    "reason": failure.reason,
                    "error_kind": failure.error_kind.value if failure.error_kind else None,
                }
                for failure in self.failures
            ],
            "results": [result.to_dict() for result in self.successes],
        }


# ==================== Query DTOs ====================


@dataclass
class GetAllowedTransitionsRequest:
    """Request for the legal next statuses of an order"""

    order_id: UUID
    tenant_id: UUID | None


@dataclass
class GetAllowedTransitionsResponse:
    """Current status and where the order may go from it"""

    found: bool
    order_id: UUID
    kind: str | None = None
    status: str | None = None
    allowed_transitions: list[str] = field(default_factory=list)
    restriction_message: str | None = None
    error: str | None = None
    error_kind: TransitionErrorKind | None = None
