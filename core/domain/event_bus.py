"""
Event Bus Interface (Domain Layer).

Order placement and delivery transitions record events on the Order
aggregate. Services hand them to the bus only after the unit of work has
committed, so a rolled-back order or transition is never announced.
"""
from abc import ABC, abstractmethod
from typing import List

from .events.base import DomainEvent


class EventBus(ABC):
    """Receives committed order events (placed, status changed, merchant credited)."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Deliver one committed event to subscribers."""

    @abstractmethod
    async def publish_all(self, events: List[DomainEvent]) -> None:
        """
        Deliver the events of one commit in the order they were recorded.

        Args:
            events: Events collected on the aggregate, oldest first
        """
