"""Domain layer - pure domain models and interfaces."""

from .entities import CartItem, LineItem, Order, Product, StatusHistory, User
from .repositories import CartRepository, OrderRepository, ProductRepository, UserRepository
from .value_objects import ExecutionID, Money, StatusType, UserAccess, UserRole

__all__ = [
    "CartItem",
    "CartRepository",
    "ExecutionID",
    "LineItem",
    "Money",
    "Order",
    "OrderRepository",
    "Product",
    "ProductRepository",
    "StatusHistory",
    "StatusType",
    "User",
    "UserAccess",
    "UserRepository",
    "UserRole",
]
