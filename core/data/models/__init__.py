"""Database models."""

from .base import Base
from .cart_model import CartModel
from .order_model import OrderItemModel, OrderModel, OrderStatusModel
from .product_model import ProductModel
from .user_model import UserModel

__all__ = [
    "Base",
    "CartModel",
    "OrderItemModel",
    "OrderModel",
    "OrderStatusModel",
    "ProductModel",
    "UserModel",
]
