"""Repository interface for products (inventory side)."""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from ..entities.product import Product


class ProductRepository(ABC):

    @abstractmethod
    async def add(self, product: Product) -> None:
        pass

    @abstractmethod
    async def find_by_id(self, product_id: str) -> Optional[Product]:
        pass

    @abstractmethod
    async def find_many(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        """Resolve live products by id; missing or soft-deleted ids are absent."""
        pass

    @abstractmethod
    async def read_stock(self, product_id: str) -> Optional[int]:
        """Fresh stock read inside the current transaction."""
        pass

    @abstractmethod
    async def compare_and_set_stock(self, product_id: str, expected: int, new_stock: int) -> bool:
        """Set stock to ``new_stock`` only if it still equals ``expected``."""
        pass
