"""
Product record owned by the inventory collaborator.

The core only reads price/stock at order time and decrements stock.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ..value_objects import Money, new_id


@dataclass
class Product:
    """A merchant's product with exact price and arbitrary-size stock."""
    user_id: str
    name: str
    price: Money
    stock: int
    description: str = ""
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        if self.price.is_negative():
            raise ValueError(f"Product price cannot be negative: {self.price}")
        if self.stock < 0:
            raise ValueError(f"Product stock cannot be negative: {self.stock}")

    @property
    def merchant_id(self) -> str:
        """The merchant is the user who listed the product."""
        return self.user_id

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock - quantity >= 0
