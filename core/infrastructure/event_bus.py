"""
Event Bus Implementation (Infrastructure Layer).

Notifies subscribers of domain events published after a commit.
"""
import asyncio
import logging
from typing import Callable, List, Optional

from core.domain.event_bus import EventBus
from core.domain.events.base import DomainEvent


logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-Memory Event Bus Implementation.

    Features:
    - Notifies registered subscribers in registration order
    - Supports sync and async handlers
    - A failing subscriber is logged and never fails the publisher

    Events are only published once the unit of work that produced them has
    committed, so subscribers never observe rolled-back state.
    """

    def __init__(self):
        """Initialize event bus with subscribers."""
        self._subscribers: List[Callable[[DomainEvent], None]] = []

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a single domain event.

        Args:
            event: Domain event to publish
        """
        logger.info(f"Publishing event: {event.event_type} (aggregate: {event.aggregate_id})")
        await self._notify_subscribers(event)

    async def publish_all(self, events: List[DomainEvent]) -> None:
        """
        Publish multiple domain events in order.

        Args:
            events: List of domain events to publish
        """
        if not events:
            return

        logger.info(f"Publishing {len(events)} events")
        for event in events:
            await self.publish(event)

    def subscribe(self, handler: Callable[[DomainEvent], None]) -> None:
        """
        Subscribe to all domain events.

        Args:
            handler: Callback function that receives events
        """
        if handler not in self._subscribers:
            self._subscribers.append(handler)
            logger.info(f"Registered event subscriber: {handler.__name__}")

    def unsubscribe(self, handler: Callable[[DomainEvent], None]) -> None:
        """
        Unsubscribe from domain events.

        Args:
            handler: Callback function to remove
        """
        if handler in self._subscribers:
            self._subscribers.remove(handler)
            logger.info(f"Unregistered event subscriber: {handler.__name__}")

    async def _notify_subscribers(self, event: DomainEvent) -> None:
        """Notify all subscribers about an event."""
        if not self._subscribers:
            return

        logger.debug(f"Notifying {len(self._subscribers)} subscribers about {event.event_type}")

        for subscriber in list(self._subscribers):
            try:
                if asyncio.iscoroutinefunction(subscriber):
                    await subscriber(event)
                else:
                    subscriber(event)
            except Exception as e:
                logger.error(f"Subscriber {subscriber.__name__} failed: {e}", exc_info=True)


audit_logger = logging.getLogger("ecommerce.events")


def log_event(event: DomainEvent) -> None:
    """Subscriber writing every event to the audit log."""
    audit_logger.info(
        f"[{event.execution_id or '-'}] {event.event_type} "
        f"{event.aggregate_type}={event.aggregate_id} {event.to_dict()['data']}"
    )


# Global event bus instance
_event_bus_instance: Optional[InMemoryEventBus] = None


def get_event_bus() -> InMemoryEventBus:
    """
    Get or create global event bus instance.

    Returns:
        Global event bus instance
    """
    global _event_bus_instance

    if _event_bus_instance is None:
        _event_bus_instance = InMemoryEventBus()

    return _event_bus_instance
