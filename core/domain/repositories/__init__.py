"""Repository interfaces."""

from .cart_repository import CartRepository
from .order_repository import OrderRepository
from .product_repository import ProductRepository
from .user_repository import UserRepository

__all__ = [
    "CartRepository",
    "OrderRepository",
    "ProductRepository",
    "UserRepository",
]
