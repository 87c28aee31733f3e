"""Whole-operation retry."""
import pytest

from core.application.retry import RetryPolicy, run_with_retry
from core.domain.exceptions import ConcurrencyError, ForbiddenError, NotFoundError
from core.settings.sections.ordering import OrderingSettings


class Flaky:
    def __init__(self, failures, error=ConcurrencyError):
        self.failures = failures
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error("lost")
        return "done"


@pytest.mark.asyncio
async def test_succeeds_within_attempts():
    op = Flaky(failures=2)

    assert await run_with_retry(op, RetryPolicy(max_attempts=3), "op") == "done"
    assert op.calls == 3


@pytest.mark.asyncio
async def test_exhaustion_is_forbidden():
    op = Flaky(failures=5)

    with pytest.raises(ForbiddenError):
        await run_with_retry(op, RetryPolicy(max_attempts=2), "op")
    assert op.calls == 2


@pytest.mark.asyncio
async def test_domain_errors_are_not_retried():
    op = Flaky(failures=1, error=NotFoundError)

    with pytest.raises(NotFoundError):
        await run_with_retry(op, RetryPolicy(max_attempts=3), "op")
    assert op.calls == 1


def test_policy_from_settings(monkeypatch):
    monkeypatch.setenv("ORDERING_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("ORDERING_BACKOFF_SECONDS", "0.25")

    policy = RetryPolicy.from_settings(OrderingSettings())

    assert policy == RetryPolicy(max_attempts=5, backoff_seconds=0.25)
