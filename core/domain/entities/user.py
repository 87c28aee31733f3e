"""User record owned by the account/ledger collaborator."""
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..value_objects import Money, UserAccess, UserRole, new_id


@dataclass
class User:
    """Account with role and spendable balance."""
    name: str
    email: str
    role: UserRole = UserRole.CUSTOMER
    balance: Money = field(default_factory=Money.zero)
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if self.balance.is_negative():
            raise ValueError(f"User balance cannot be negative: {self.balance}")

    def access(self) -> UserAccess:
        """Identity as seen by role-gated operations."""
        return UserAccess(id=self.id, role=self.role)
