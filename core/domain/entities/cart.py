"""Shopping cart line."""
from dataclasses import dataclass, field

from ..value_objects import new_id


@dataclass
class CartItem:
    """One product a user intends to buy; unique per (user, product)."""
    user_id: str
    product_id: str
    merchant_id: str
    quantity: int
    id: str = field(default_factory=new_id)
