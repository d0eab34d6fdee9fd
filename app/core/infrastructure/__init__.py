"""
Core Infrastructure Module

Provides cross-cutting infrastructure patterns for fault tolerance.

Components:
- Retry: failure classification and bounded retry with fixed or growing delay
"""

from app.core.infrastructure.retry import (
    TRANSIENT_MESSAGE_SIGNATURES,
    FailureKind,
    Retryer,
    RetryConfig,
    RetryExhaustedError,
    RetryStats,
    classify_failure,
)

__all__ = [
    "TRANSIENT_MESSAGE_SIGNATURES",
    "FailureKind",
    "Retryer",
    "RetryConfig",
    "RetryExhaustedError",
    "RetryStats",
    "classify_failure",
]
