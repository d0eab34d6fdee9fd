"""
Unit tests for failure classification and the Retryer.
"""

from unittest.mock import AsyncMock

import pytest

from app.core.domain import PermanentPersistenceException, TransientPersistenceException
from app.core.infrastructure import FailureKind, Retryer, RetryExhaustedError, classify_failure


@pytest.mark.unit
class TestClassifyFailure:
    @pytest.mark.parametrize(
        "message",
        ["Network unreachable", "Failed to fetch", "statement timeout exceeded"],
    )
    def test_message_signatures_are_transient(self, message):
        assert classify_failure(RuntimeError(message)) is FailureKind.TRANSIENT

    @pytest.mark.parametrize("message", ["permission denied", "duplicate key value", "boom"])
    def test_other_messages_are_permanent(self, message):
        assert classify_failure(RuntimeError(message)) is FailureKind.PERMANENT

    def test_builtin_timeouts_are_transient(self):
        assert classify_failure(TimeoutError()) is FailureKind.TRANSIENT
        assert classify_failure(ConnectionResetError()) is FailureKind.TRANSIENT

    def test_retryable_attribute_wins_over_message(self):
        permanent = PermanentPersistenceException("update", "network policy rejected the write")
        transient = TransientPersistenceException("update", "server closed the connection")

        assert classify_failure(permanent) is FailureKind.PERMANENT
        assert classify_failure(transient) is FailureKind.TRANSIENT


@pytest.mark.unit
class TestRetryer:
    async def test_returns_first_success(self):
        func = AsyncMock(return_value="ok")
        sleep = AsyncMock()

        result = await Retryer(max_attempts=3, sleep=sleep).execute(func, 1, key="v")

        assert result == "ok"
        func.assert_awaited_once_with(1, key="v")
        sleep.assert_not_awaited()

    async def test_retries_transient_failures_with_fixed_delay(self):
        func = AsyncMock(side_effect=[TimeoutError("timeout"), TimeoutError("timeout"), "ok"])
        sleep = AsyncMock()
        retryer = Retryer(max_attempts=3, initial_delay=1.0, sleep=sleep)

        assert await retryer.execute(func) == "ok"
        assert func.await_count == 3
        assert [call.args[0] for call in sleep.await_args_list] == [1.0, 1.0]
        assert retryer.stats.total_attempts == 3
        assert retryer.stats.successful_attempts == 1

    async def test_permanent_failure_is_raised_immediately(self):
        func = AsyncMock(side_effect=RuntimeError("permission denied"))
        sleep = AsyncMock()

        with pytest.raises(RuntimeError, match="permission denied"):
            await Retryer(max_attempts=3, sleep=sleep).execute(func)

        assert func.await_count == 1
        sleep.assert_not_awaited()

    async def test_exhaustion_carries_last_exception(self):
        func = AsyncMock(side_effect=RuntimeError("network down"))

        with pytest.raises(RetryExhaustedError) as exc_info:
            await Retryer(max_attempts=3, sleep=AsyncMock()).execute(func)

        assert exc_info.value.attempts == 3
        assert str(exc_info.value.last_exception) == "network down"
        assert func.await_count == 3

    async def test_exponential_delay_is_capped(self):
        func = AsyncMock(side_effect=[TimeoutError(), TimeoutError(), TimeoutError(), "ok"])
        sleep = AsyncMock()
        retryer = Retryer(max_attempts=4, initial_delay=1.0, exponential_base=2.0, max_delay=3.0, sleep=sleep)

        await retryer.execute(func)

        assert [call.args[0] for call in sleep.await_args_list] == [1.0, 2.0, 3.0]

    async def test_on_retry_callback(self):
        seen = []
        func = AsyncMock(side_effect=[TimeoutError("t"), "ok"])

        await Retryer(
            max_attempts=2, sleep=AsyncMock(), on_retry=lambda attempt, exc, delay: seen.append(attempt)
        ).execute(func)

        assert seen == [1]

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            Retryer(max_attempts=0)
