"""Whole-operation retry on lost write races."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from core.domain.exceptions import ConcurrencyError, ForbiddenError
from core.settings.sections.ordering import OrderingSettings


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """Retry policy for operations guarded by compare-and-set writes."""

    max_attempts: int = 3
    backoff_seconds: float = 0.0

    @classmethod
    def from_settings(cls, settings: OrderingSettings) -> "RetryPolicy":
        return cls(max_attempts=settings.max_attempts, backoff_seconds=settings.backoff_seconds)


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    name: str,
) -> T:
    """
    Run ``operation`` until it stops losing races.

    Each attempt starts from scratch (fresh reads, fresh transaction), so
    nothing from a failed attempt survives. Only ``ConcurrencyError`` is
    retried; domain errors propagate immediately.

    Raises:
        ForbiddenError: Every attempt lost a race
    """
    for attempt in range(1, policy.max_attempts + 1):
        try:
            return await operation()
        except ConcurrencyError as exc:
            logger.warning(
                f"{name}: attempt {attempt}/{policy.max_attempts} lost a concurrent write ({exc})"
            )
            if attempt < policy.max_attempts and policy.backoff_seconds > 0:
                await asyncio.sleep(policy.backoff_seconds)

    logger.error(f"{name}: giving up after {policy.max_attempts} attempts")
    raise ForbiddenError("resource is busy, please retry")
