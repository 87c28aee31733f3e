"""Domain entities."""

from .cart import CartItem
from .order import AppliedTransition, LineItem, Order, StatusHistory
from .product import Product
from .user import User

__all__ = [
    "AppliedTransition",
    "CartItem",
    "LineItem",
    "Order",
    "Product",
    "StatusHistory",
    "User",
]
