"""
Unit tests for RetryPolicy: attempt counts per failure class and result shape.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.core.domain import (
    ConcurrencyException,
    EntityNotFoundException,
    PermanentPersistenceException,
    TransientPersistenceException,
)
from app.domains.orders.application.dto import TransitionErrorKind, TransitionResult
from app.domains.orders.application.services import RetryPolicy


def _attempts_raising(*outcomes):
    """Attempt function that raises or returns each outcome in turn."""
    calls = []

    async def attempt(number: int) -> TransitionResult:
        calls.append(number)
        outcome = outcomes[min(len(calls), len(outcomes)) - 1]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    return attempt, calls


@pytest.mark.unit
class TestRetryPolicy:
    async def test_timeout_is_tried_three_times(self):
        order_id = uuid4()
        sleep = AsyncMock()
        attempt, calls = _attempts_raising(RuntimeError("timeout"))

        result = await RetryPolicy(max_attempts=3, delay=1.0, sleep=sleep).run(attempt, order_id)

        assert calls == [1, 2, 3]
        assert sleep.await_count == 2
        assert all(call.args[0] == 1.0 for call in sleep.await_args_list)
        assert not result.success
        assert result.error == "timeout"
        assert result.error_kind is TransitionErrorKind.TRANSIENT
        assert result.attempts == 3

    async def test_permission_denied_is_tried_once(self):
        sleep = AsyncMock()
        attempt, calls = _attempts_raising(RuntimeError("permission denied"))

        result = await RetryPolicy(sleep=sleep).run(attempt, uuid4())

        assert calls == [1]
        sleep.assert_not_awaited()
        assert result.error == "permission denied"
        assert result.error_kind is TransitionErrorKind.PERMANENT
        assert result.attempts == 1

    async def test_recovers_after_transient_failure(self):
        order_id = uuid4()
        success = TransitionResult(success=True, order_id=order_id, status="confirmed")
        attempt, calls = _attempts_raising(TransientPersistenceException("update", "connection reset"), success)

        result = await RetryPolicy(sleep=AsyncMock()).run(attempt, order_id)

        assert result.success
        assert calls == [1, 2]
        assert result.attempts == 2

    async def test_typed_permanent_error_ignores_message(self):
        attempt, calls = _attempts_raising(PermanentPersistenceException("update", "network policy violation"))

        result = await RetryPolicy(sleep=AsyncMock()).run(attempt, uuid4())

        assert calls == [1]
        assert result.error_kind is TransitionErrorKind.PERMANENT

    async def test_domain_errors_map_to_error_kinds(self):
        attempt, _ = _attempts_raising(ConcurrencyException("Product", uuid4(), expected=5))
        conflict = await RetryPolicy(sleep=AsyncMock()).run(attempt, uuid4())

        attempt, _ = _attempts_raising(EntityNotFoundException("Order", uuid4()))
        missing = await RetryPolicy(sleep=AsyncMock()).run(attempt, uuid4())

        assert conflict.error_kind is TransitionErrorKind.CONFLICT
        assert missing.error_kind is TransitionErrorKind.NOT_FOUND

    async def test_failed_result_is_returned_without_retry(self):
        order_id = uuid4()
        failure = TransitionResult.failure(order_id, "Order not found", TransitionErrorKind.NOT_FOUND)
        attempt, calls = _attempts_raising(failure)

        result = await RetryPolicy(sleep=AsyncMock()).run(attempt, order_id)

        assert result is failure
        assert calls == [1]

    def test_from_settings(self, test_settings):
        policy = RetryPolicy.from_settings(test_settings)

        assert policy.max_attempts == 3
        assert policy.delay == 0.0

    def test_is_transient(self):
        policy = RetryPolicy()

        assert policy.is_transient(RuntimeError("Failed to fetch"))
        assert not policy.is_transient(RuntimeError("permission denied"))
        # Typed domain errors never fall back to message matching
        assert not policy.is_transient(EntityNotFoundException("Order", "timeout"))
