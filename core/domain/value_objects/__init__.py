"""Domain value objects."""

from .identity import COURIER_ROLES, UserAccess, UserRole
from .status import IN_TRANSIT, StatusEntry, StatusType
from .value_objects import ExecutionID, Money, new_id

__all__ = [
    "COURIER_ROLES",
    "ExecutionID",
    "IN_TRANSIT",
    "Money",
    "StatusEntry",
    "StatusType",
    "UserAccess",
    "UserRole",
    "new_id",
]
