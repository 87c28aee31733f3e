"""
Domain exceptions.

Every failure the core reports to callers is one of these. The HTTP layer
maps each subclass to a status code; the core never retries them.
"""

from typing import Optional


class DomainError(Exception):
    """Base class for all domain failures."""

    default_message = "Domain rule violated"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def type(self) -> str:
        """Stable error type name used in API responses."""
        name = self.__class__.__name__
        return name[:-5] if name.endswith("Error") else name


class NotFoundError(DomainError):
    """Referenced product or order does not exist."""

    default_message = "No resource found"


class MismatchMerchantError(DomainError):
    """Line items span more than one merchant."""

    default_message = "products must be from the same merchant"


class ForbiddenError(DomainError):
    """
    Ownership, role or transition violation.

    Deliberately coarse: callers are not told which precondition failed.
    """

    default_message = "You have no permission to access this resource"


class InsufficientFundError(DomainError):
    """Buyer balance does not cover the order price."""

    default_message = "Your balance is not sufficient to complete this transaction."


class DomainValidationError(DomainError):
    """Malformed request that passed schema validation."""

    default_message = "validation error"

    @property
    def type(self) -> str:
        return "ValidationError"


class ConcurrencyError(Exception):
    """
    Raised when a guarded write lost a race with a concurrent writer.

    Internal to the application layer: the whole operation is retried.
    """
    pass
