"""SQLAlchemy ORM models for Order aggregate."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..types import BigIntString, DecimalString, UTCDateTime
from .base import Base


class OrderModel(Base):
    """SQLAlchemy ORM model for orders table."""

    __tablename__ = "orders"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    merchant_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    courier_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    price = Column(DecimalString, nullable=False)
    # Mirrors the last history entry
    current_status = Column(String(50), nullable=False, index=True)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
    deleted_at = Column(UTCDateTime, nullable=True)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )
    statuses = relationship(
        "OrderStatusModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderStatusModel.position",
    )


class OrderItemModel(Base):
    """SQLAlchemy ORM model for order_items table."""

    __tablename__ = "order_items"
    __table_args__ = (UniqueConstraint("order_id", "position"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False)
    position = Column(Integer, nullable=False)
    product_id = Column(String(36), nullable=False)
    quantity = Column(BigIntString, nullable=False)

    order = relationship("OrderModel", back_populates="items")


class OrderStatusModel(Base):
    """SQLAlchemy ORM model for order_statuses table (append-only history)."""

    __tablename__ = "order_statuses"
    __table_args__ = (UniqueConstraint("order_id", "position"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False)
    position = Column(Integer, nullable=False)
    type = Column(String(50), nullable=False)
    date = Column(UTCDateTime, nullable=False)

    order = relationship("OrderModel", back_populates="statuses")
