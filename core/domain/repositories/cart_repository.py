"""Repository interface for cart items."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.cart import CartItem


class CartRepository(ABC):

    @abstractmethod
    async def upsert(self, item: CartItem) -> CartItem:
        """Insert, or overwrite the quantity of the user's row for that product."""
        pass

    @abstractmethod
    async def find_by_id(self, cart_id: str) -> Optional[CartItem]:
        pass

    @abstractmethod
    async def find_by_user(self, user_id: str) -> List[CartItem]:
        pass

    @abstractmethod
    async def delete(self, cart_id: str) -> None:
        pass
