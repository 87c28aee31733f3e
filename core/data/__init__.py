"""Data layer - infrastructure persistence and mapping."""

from .mappers import CartMapper, OrderMapper, ProductMapper, UserMapper
from .models import Base
from .uow import UnitOfWork, create_uow

__all__ = [
    "Base",
    "CartMapper",
    "create_uow",
    "OrderMapper",
    "ProductMapper",
    "UnitOfWork",
    "UserMapper",
]
