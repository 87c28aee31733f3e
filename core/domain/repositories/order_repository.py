"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.order import AppliedTransition, Order


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> None:
        """Insert a newly placed order with its line items and initial status."""
        pass

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """Retrieve a live (not soft-deleted) order.

        Args:
            order_id: Order identifier

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_buyer(self, user_id: str) -> List[Order]:
        pass

    @abstractmethod
    async def find_by_merchant(self, merchant_id: str) -> List[Order]:
        pass

    @abstractmethod
    async def find_deliverable_for(self, courier_id: str) -> List[Order]:
        """Orders waiting for any courier, or assigned to ``courier_id``."""
        pass

    @abstractmethod
    async def save_transition(self, order: Order, transition: AppliedTransition) -> bool:
        """Persist a status transition if nobody else changed the order first.

        Args:
            order: Order after the transition was applied in memory
            transition: Entries to append and the version they were based on

        Returns:
            True if written, False if the stored version no longer matched
        """
        pass
