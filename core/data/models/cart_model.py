"""SQLAlchemy ORM model for carts."""

from sqlalchemy import Column, ForeignKey, String, UniqueConstraint

from ..types import BigIntString
from .base import Base


class CartModel(Base):
    """One row per (user, product)."""

    __tablename__ = "carts"
    __table_args__ = (UniqueConstraint("user_id", "product_id"),)

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    merchant_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    quantity = Column(BigIntString, nullable=False)
