"""
Order domain events.

Recorded by the Order aggregate, published after the unit of work commits.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from .base import DomainEvent


@dataclass
class OrderPlacedEvent(DomainEvent):
    """
    Order created by the placement engine.

    Balance debit and stock decrement committed with it.
    """

    order_id: str = ""
    merchant_id: str = ""
    price: Decimal = Decimal(0)
    line_items_count: int = 0

    def __post_init__(self):
        if not self.aggregate_id and self.order_id:
            object.__setattr__(self, 'aggregate_id', self.order_id)
        super().__post_init__()


@dataclass
class OrderStatusChangedEvent(DomainEvent):
    """Statuses appended to an order's history by one transition."""

    order_id: str = ""
    previous_status: str = ""
    pushed: List[str] = field(default_factory=list)
    courier_id: Optional[str] = None

    def __post_init__(self):
        if not self.aggregate_id and self.order_id:
            object.__setattr__(self, 'aggregate_id', self.order_id)
        super().__post_init__()


@dataclass
class MerchantCreditedEvent(DomainEvent):
    """Merchant settled for a delivered order."""

    order_id: str = ""
    merchant_id: str = ""
    amount: Decimal = Decimal(0)

    def __post_init__(self):
        if not self.aggregate_id and self.order_id:
            object.__setattr__(self, 'aggregate_id', self.order_id)
        super().__post_init__()
