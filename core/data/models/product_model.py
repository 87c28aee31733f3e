"""SQLAlchemy ORM model for products (inventory side)."""

from sqlalchemy import Column, ForeignKey, String, Text

from ..types import BigIntString, DecimalString, UTCDateTime
from .base import Base


class ProductModel(Base):
    """SQLAlchemy ORM model for products table."""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(DecimalString, nullable=False)
    stock = Column(BigIntString, nullable=False)
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
    deleted_at = Column(UTCDateTime, nullable=True)
