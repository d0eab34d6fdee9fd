"""
Retry Pattern Implementation

Provides configurable retry logic for transient failure recovery.
Failures are classified as transient or permanent before any retry
decision is made; only transient failures are attempted again.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

# Message fragments that mark an untyped error as a connectivity problem.
TRANSIENT_MESSAGE_SIGNATURES: tuple[str, ...] = ("network", "fetch", "timeout")


class FailureKind(str, Enum):
    """Outcome of classifying a failed attempt."""

    TRANSIENT = "transient"
    PERMANENT = "permanent"


def classify_failure(exc: BaseException) -> FailureKind:
    """
    Decide whether a failed attempt is worth repeating.

    Typed errors win: anything exposing a boolean ``retryable`` attribute
    (the persistence exceptions raised by repositories) is classified by
    it. Built-in timeouts and connection errors are transient. Untyped
    errors fall back to matching the message against
    ``TRANSIENT_MESSAGE_SIGNATURES``.
    """
    retryable = getattr(exc, "retryable", None)
    if isinstance(retryable, bool):
        return FailureKind.TRANSIENT if retryable else FailureKind.PERMANENT

    if isinstance(exc, (TimeoutError, ConnectionError)):
        return FailureKind.TRANSIENT

    message = str(exc).lower()
    if any(signature in message for signature in TRANSIENT_MESSAGE_SIGNATURES):
        return FailureKind.TRANSIENT

    return FailureKind.PERMANENT


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    initial_delay: float = 1.0  # seconds
    max_delay: float = 60.0  # seconds
    exponential_base: float = 1.0  # 1.0 keeps the delay fixed
    jitter: bool = False
    jitter_factor: float = 0.1  # 10% jitter


@dataclass
class RetryStats:
    """Statistics for retry operations."""

    total_attempts: int = 0
    successful_attempts: int = 0
    failed_attempts: int = 0
    total_delay_seconds: float = 0.0
    last_exception: BaseException | None = None


class RetryExhaustedError(Exception):
    """Raised when all retry attempts have been exhausted."""

    def __init__(self, message: str, last_exception: BaseException | None = None, attempts: int = 0):
        super().__init__(message)
        self.last_exception = last_exception
        self.attempts = attempts


class Retryer:
    """
    Configurable retry mechanism.

    Defaults to a fixed delay between attempts; set ``exponential_base``
    above 1.0 for backoff.

    Example:
        ```python
        retryer = Retryer(max_attempts=3, initial_delay=1.0)
        result = await retryer.execute(repository.update_status, order_id, status)
        ```
    """

    def __init__(
        self,
        max_attempts: int = 3,
        initial_delay: float = 1.0,
        max_delay: float = 60.0,
        exponential_base: float = 1.0,
        jitter: bool = False,
        classifier: Callable[[BaseException], FailureKind] = classify_failure,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        on_retry: Callable[[int, BaseException, float], None] | None = None,
    ):
        """
        Initialize retryer.

        Args:
            max_attempts: Maximum number of attempts (first try included)
            initial_delay: Delay before the second attempt
            max_delay: Upper bound for any single delay
            exponential_base: Growth factor between delays
            jitter: Whether to add random jitter
            classifier: Maps an exception to TRANSIENT or PERMANENT
            sleep: Awaitable used to wait between attempts
            on_retry: Callback called before each retry
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.config = RetryConfig(
            max_attempts=max_attempts,
            initial_delay=initial_delay,
            max_delay=max_delay,
            exponential_base=exponential_base,
            jitter=jitter,
        )
        self.classifier = classifier
        self._sleep = sleep
        self.on_retry = on_retry
        self._stats = RetryStats()

    @property
    def stats(self) -> RetryStats:
        """Get retry statistics."""
        return self._stats

    def _calculate_delay(self, attempt: int) -> float:
        """Calculate delay before the attempt following ``attempt``."""
        delay = self.config.initial_delay * (self.config.exponential_base ** (attempt - 1))
        delay = min(delay, self.config.max_delay)

        if self.config.jitter:
            jitter_range = delay * self.config.jitter_factor
            delay += random.uniform(-jitter_range, jitter_range)

        return max(0, delay)

    async def execute(self, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        """
        Execute an async function with retry logic.

        Args:
            func: Coroutine function to execute
            *args: Positional arguments
            **kwargs: Keyword arguments

        Returns:
            Result of the function

        Raises:
            RetryExhaustedError: If every attempt failed transiently
            Exception: The original exception when classified as permanent
        """
        for attempt in range(1, self.config.max_attempts + 1):
            self._stats.total_attempts += 1

            try:
                result = await func(*args, **kwargs)
                self._stats.successful_attempts += 1
                return result

            except Exception as e:
                self._stats.last_exception = e

                if self.classifier(e) is FailureKind.PERMANENT:
                    self._stats.failed_attempts += 1
                    raise

                if attempt >= self.config.max_attempts:
                    self._stats.failed_attempts += 1
                    raise RetryExhaustedError(
                        f"All {self.config.max_attempts} retry attempts exhausted",
                        last_exception=e,
                        attempts=attempt,
                    ) from e

                delay = self._calculate_delay(attempt)
                self._stats.total_delay_seconds += delay

                logger.warning(
                    f"Retry attempt {attempt}/{self.config.max_attempts} failed: {e}. "
                    f"Retrying in {delay:.2f}s",
                    extra={
                        "attempt": attempt,
                        "max_attempts": self.config.max_attempts,
                        "delay": delay,
                        "exception": str(e),
                    },
                )

                if self.on_retry:
                    self.on_retry(attempt, e, delay)

                await self._sleep(delay)

        # Unreachable: the loop either returns or raises
        raise RetryExhaustedError(
            f"Retry logic error after {self.config.max_attempts} attempts",
            attempts=self.config.max_attempts,
        )
