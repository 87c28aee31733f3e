"""Repository interface for users (ledger side)."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.user import User
from ..value_objects import Money


class UserRepository(ABC):

    @abstractmethod
    async def add(self, user: User) -> None:
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def read_balance(self, user_id: str) -> Optional[Money]:
        """Fresh balance read inside the current transaction."""
        pass

    @abstractmethod
    async def compare_and_set_balance(self, user_id: str, expected: Money, new_balance: Money) -> bool:
        """Set balance to ``new_balance`` only if it still equals ``expected``."""
        pass
