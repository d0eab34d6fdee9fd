"""
Retry Policy

Runs one transition attempt at a time and repeats it after transient
failures. Permanent failures and exhausted retries come back as failed
TransitionResults; nothing is raised to the caller.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable
from uuid import UUID

from app.config.settings import Settings
from app.core.domain import (
    ConcurrencyException,
    DomainException,
    EntityNotFoundException,
    TenantScopeException,
    TransientPersistenceException,
    ValidationException,
)
from app.core.infrastructure import FailureKind, Retryer, RetryExhaustedError, classify_failure
from app.domains.orders.application.dto import TransitionErrorKind, TransitionResult

logger = logging.getLogger(__name__)

# Receives the 1-based attempt number
TransitionAttempt = Callable[[int], Awaitable[TransitionResult]]


def classify_transition_failure(exc: BaseException) -> FailureKind:
    """Typed errors first, message signature only for untyped ones."""
    if isinstance(exc, TransientPersistenceException):
        return FailureKind.TRANSIENT
    if isinstance(exc, DomainException):
        return FailureKind.PERMANENT
    return classify_failure(exc)


def error_kind_for(exc: BaseException) -> TransitionErrorKind:
    if classify_transition_failure(exc) is FailureKind.TRANSIENT:
        return TransitionErrorKind.TRANSIENT
    if isinstance(exc, ConcurrencyException):
        return TransitionErrorKind.CONFLICT
    if isinstance(exc, EntityNotFoundException):
        return TransitionErrorKind.NOT_FOUND
    if isinstance(exc, (ValidationException, TenantScopeException)):
        return TransitionErrorKind.VALIDATION
    return TransitionErrorKind.PERMANENT


class RetryPolicy:
    """
    Fixed-delay retry around a transition attempt.

    Example:
        ```python
        policy = RetryPolicy(max_attempts=3, delay=1.0)
        result = await policy.run(lambda attempt: executor.transition(...), order_id)
        ```
    """

    def __init__(
        self,
        max_attempts: int = 3,
        delay: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.max_attempts = max_attempts
        self.delay = delay
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.ORDER_TRANSITION_MAX_ATTEMPTS,
            delay=settings.ORDER_TRANSITION_RETRY_DELAY,
        )

    def is_transient(self, exc: BaseException) -> bool:
        return classify_transition_failure(exc) is FailureKind.TRANSIENT

    async def run(self, attempt_fn: TransitionAttempt, order_id: UUID) -> TransitionResult:
        attempts = 0

        async def attempt() -> TransitionResult:
            nonlocal attempts
            attempts += 1
            return await attempt_fn(attempts)

        retryer = Retryer(
            max_attempts=self.max_attempts,
            initial_delay=self.delay,
            classifier=classify_transition_failure,
            sleep=self._sleep,
        )

        try:
            result = await retryer.execute(attempt)
            result.attempts = attempts
            return result

        except RetryExhaustedError as e:
            cause = e.last_exception
            logger.error(
                f"Order {order_id}: giving up after {attempts} attempts "
                f"({retryer.stats.total_delay_seconds:.1f}s waited): {cause}"
            )
            return TransitionResult.failure(
                order_id,
                str(cause) if cause else str(e),
                TransitionErrorKind.TRANSIENT,
                attempts=attempts,
            )

        except Exception as e:
            logger.error(f"Order {order_id}: transition failed permanently: {e}")
            return TransitionResult.failure(order_id, str(e), error_kind_for(e), attempts=attempts)
