"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, Inexact, InvalidOperation, Overflow
from uuid import UUID, uuid4

# Add, subtract and multiply never round under this context; anything inexact raises.
EXACT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, Inexact, Overflow],
)


@dataclass(frozen=True, order=True)
class Money:
    """
    Immutable fixed-point monetary value.

    CRITICAL: Always use Decimal, never float!
    Prices and balances are exact; a float would silently lose cents.
    """
    amount: Decimal

    def __post_init__(self):
        if isinstance(self.amount, float):
            raise TypeError("Money cannot be built from float, use Decimal or str")
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))
        if not self.amount.is_finite():
            raise ValueError(f"Money must be finite, got: {self.amount}")

    @classmethod
    def zero(cls) -> 'Money':
        return cls(amount=Decimal(0))

    def __str__(self) -> str:
        return format(self.amount, "f")

    def __add__(self, other: 'Money') -> 'Money':
        return Money(amount=EXACT.add(self.amount, other.amount))

    def __sub__(self, other: 'Money') -> 'Money':
        return Money(amount=EXACT.subtract(self.amount, other.amount))

    def __mul__(self, quantity: int) -> 'Money':
        """Multiply by an integer quantity (exact, any size)."""
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise TypeError(f"Money can only be multiplied by int, got: {type(quantity).__name__}")
        return Money(amount=EXACT.multiply(self.amount, Decimal(quantity)))

    def is_negative(self) -> bool:
        """Check if amount is negative."""
        return self.amount < 0

    def covers(self, other: 'Money') -> bool:
        """True when this amount is enough to pay ``other``."""
        return self.amount >= other.amount


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for unit-of-work tracing."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=uuid4())

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)


def new_id() -> str:
    """Generate a new aggregate identifier."""
    return str(uuid4())
