"""
Exact-value column types.

Money and quantities are unbounded, so they are stored as canonical decimal
strings. Every backend keeps them bit-exact, and equality on the stored text
is equality on the value (compare-and-set updates rely on that).
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.types import TypeDecorator

from core.domain.value_objects.value_objects import EXACT


def canonical_decimal(value: Decimal) -> str:
    """Plain (non-exponent) text with no trailing zeros: Decimal("10.50") -> "10.5"."""
    text = format(value.normalize(EXACT), "f")
    return "0" if text in ("-0", "0") else text


class DecimalString(TypeDecorator):
    """``Decimal`` stored as canonical text."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect) -> Optional[str]:
        if value is None:
            return None
        return canonical_decimal(Decimal(value))

    def process_result_value(self, value, dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(value)


class BigIntString(TypeDecorator):
    """Arbitrary-precision ``int`` stored as decimal text."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return str(value)

    def process_result_value(self, value, dialect) -> Optional[int]:
        if value is None:
            return None
        return int(value)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes, including on SQLite which drops tzinfo."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
