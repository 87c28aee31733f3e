"""Identity value objects shared by every role-gated operation."""
from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    """User roles as issued by the authentication service."""

    CUSTOMER = "Customer"
    COURIER = "Courier"
    ADMIN = "Admin"


# Roles allowed to carry parcels
COURIER_ROLES = frozenset({UserRole.COURIER, UserRole.ADMIN})


@dataclass(frozen=True)
class UserAccess:
    """Authenticated caller: who they are and which role they act in."""
    id: str
    role: UserRole

    @property
    def can_deliver(self) -> bool:
        return self.role in COURIER_ROLES
