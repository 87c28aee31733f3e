"""SQLAlchemy ORM model for users (ledger side)."""

from sqlalchemy import Column, String

from ..types import DecimalString, UTCDateTime
from .base import Base


class UserModel(Base):
    """SQLAlchemy ORM model for users table."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(20), nullable=False, default="Customer")
    balance = Column(DecimalString, nullable=False, default=0)
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
