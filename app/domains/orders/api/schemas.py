"""
Orders API Schemas

Pydantic schemas for API request/response validation.
"""

from uuid import UUID

from pydantic import BaseModel, Field


class TransitionStatusRequest(BaseModel):
    """Move one order to a new status."""

    status: str = Field(..., min_length=1, max_length=50)
    cancellation_reason: str | None = Field(default=None, max_length=500)
    notes: str | None = Field(default=None, max_length=1000)
    performed_by: str | None = Field(default=None, max_length=255)


class BulkTransitionRequest(TransitionStatusRequest):
    """Move many orders to the same status."""

    order_ids: list[UUID] = Field(..., min_length=1, max_length=500)


class StockAdjustmentResponse(BaseModel):
    product_id: UUID
    previous_quantity: float
    new_quantity: float
    change_amount: float


class TransitionResultResponse(BaseModel):
    """Outcome of one order's status change."""

    success: bool
    order_id: UUID
    status: str | None = None
    previous_status: str | None = None
    error: str | None = None
    error_kind: str | None = None
    warnings: list[str] = Field(default_factory=list)
    already_applied: bool = False
    attempts: int = 1
    adjustments: list[StockAdjustmentResponse] = Field(default_factory=list)


class BulkFailureResponse(BaseModel):
    order_id: UUID
    reason: str
    error_kind: str | None = None


class BulkTransitionResponse(BaseModel):
    """Aggregate of a bulk status change."""

    success_count: int
    fail_count: int
    summary: str
    failures: list[BulkFailureResponse] = Field(default_factory=list)
    results: list[TransitionResultResponse] = Field(default_factory=list)


class AllowedTransitionsResponse(BaseModel):
    """Current status and the legal next statuses."""

    order_id: UUID
    kind: str
    status: str
    allowed_transitions: list[str]
    restriction_message: str | None = None
