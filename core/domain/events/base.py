"""
Base Domain Event.

All domain events inherit from this base class.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, Dict, Any
import uuid


@dataclass
class DomainEvent:
    """
    Base class for all domain events.

    Events are immutable records of things that have happened.
    Aggregates collect them; application services publish them after commit.
    """

    # Event metadata
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: str = field(init=False)
    event_version: int = 1

    # Aggregate information
    aggregate_id: str = field(default="")
    aggregate_type: str = field(init=False)

    # Execution context
    execution_id: Optional[str] = None
    user_id: Optional[str] = None

    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Set event type and aggregate type from class name."""
        if not hasattr(self, 'event_type') or not self.event_type:
            object.__setattr__(self, 'event_type', self.__class__.__name__)

        if not hasattr(self, 'aggregate_type') or not self.aggregate_type:
            object.__setattr__(self, 'aggregate_type', self._get_aggregate_type())

    def _get_aggregate_type(self) -> str:
        """
        Extract aggregate type from event type.

        Example: OrderPlacedEvent -> Order
        """
        event_name = self.__class__.__name__

        if event_name.endswith('Event'):
            event_name = event_name[:-5]

        for i, char in enumerate(event_name):
            if i > 0 and char.isupper():
                return event_name[:i]

        return event_name

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary for serialization.

        Returns:
            Dictionary representation of event
        """
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "event_version": self.event_version,
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "execution_id": self.execution_id,
            "user_id": self.user_id,
            "occurred_at": self.occurred_at.isoformat(),
            "data": self._get_event_data()
        }

    def _get_event_data(self) -> Dict[str, Any]:
        """Get event-specific payload, JSON-safe."""
        data = {}

        for key, value in self.__dict__.items():
            if key in (
                'event_id', 'event_type', 'event_version',
                'aggregate_id', 'aggregate_type',
                'execution_id', 'user_id', 'occurred_at'
            ):
                continue
            if isinstance(value, Decimal):
                data[key] = str(value)
            elif isinstance(value, Enum):
                data[key] = value.value
            elif isinstance(value, (list, tuple)):
                data[key] = [v.value if isinstance(v, Enum) else v for v in value]
            else:
                data[key] = value

        return data
