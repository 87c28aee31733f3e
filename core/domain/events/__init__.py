"""Domain events published through the Event Bus."""
from .base import DomainEvent
from .order_events import (
    MerchantCreditedEvent,
    OrderPlacedEvent,
    OrderStatusChangedEvent,
)

__all__ = [
    "DomainEvent",
    "MerchantCreditedEvent",
    "OrderPlacedEvent",
    "OrderStatusChangedEvent",
]
