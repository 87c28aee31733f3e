"""Fixtures wiring application services to the per-test database."""

import pytest

from core.application.retry import RetryPolicy
from core.application.services import (
    CartService,
    DeliveryService,
    OrderPlacementService,
    OrderQueryService,
)


@pytest.fixture
def retry_policy() -> RetryPolicy:
    return RetryPolicy(max_attempts=3, backoff_seconds=0.0)


@pytest.fixture
def placement(session_factory, event_bus, retry_policy) -> OrderPlacementService:
    return OrderPlacementService(session_factory, event_bus, retry_policy)


@pytest.fixture
def delivery(session_factory, event_bus, retry_policy) -> DeliveryService:
    return DeliveryService(session_factory, event_bus, retry_policy)


@pytest.fixture
def queries(session_factory) -> OrderQueryService:
    return OrderQueryService(session_factory)


@pytest.fixture
def carts(session_factory) -> CartService:
    return CartService(session_factory)
