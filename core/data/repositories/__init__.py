"""SQLAlchemy repository implementations."""

from .cart_repository_impl import SqlAlchemyCartRepository
from .order_repository_impl import SqlAlchemyOrderRepository
from .product_repository_impl import SqlAlchemyProductRepository
from .user_repository_impl import SqlAlchemyUserRepository

__all__ = [
    "SqlAlchemyCartRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyProductRepository",
    "SqlAlchemyUserRepository",
]
