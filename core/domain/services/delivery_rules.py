"""
Delivery transition rules.

Pure function over (current status, requested status, actor facts).
No storage, no clock: the aggregate applies the returned effect.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from ..value_objects import COURIER_ROLES, StatusType, UserRole


class CourierChange(Enum):
    """What a transition does to the order's courier of record."""

    KEEP = "keep"
    ASSIGN = "assign"
    CLEAR = "clear"


@dataclass(frozen=True)
class Allow:
    """
    Transition is legal.

    ``pushes`` lists every status appended to history, in order; a return to
    the merchant is immediately followed by ``ProcessingInMerchant``.
    """
    pushes: Tuple[StatusType, ...]
    courier: CourierChange = CourierChange.KEEP
    credit_merchant: bool = False


@dataclass(frozen=True)
class Deny:
    """Transition is illegal."""
    pass


Decision = Union[Allow, Deny]

DENY = Deny()


def decide_transition(
    current: StatusType,
    requested: StatusType,
    actor_role: UserRole,
    actor_is_courier_of_record: bool,
    *,
    actor_is_merchant_of_record: bool = False,
    courier_assigned: bool = False,
) -> Decision:
    """
    Decide whether ``requested`` may follow ``current`` for this actor.

    Args:
        current: Last status in the order's history
        requested: Status the actor asks to push
        actor_role: Role the actor authenticated with
        actor_is_courier_of_record: Actor is the order's assigned courier
        actor_is_merchant_of_record: Actor owns the order as merchant
        courier_assigned: Order currently has any courier

    Returns:
        Allow with the effect to apply, or Deny
    """
    # Merchant confirmation is an ownership check, not a role check
    if current is StatusType.PROCESSING_IN_MERCHANT:
        if requested is StatusType.WAITING_FOR_COURIER and actor_is_merchant_of_record:
            return Allow(pushes=(StatusType.WAITING_FOR_COURIER,))
        return DENY

    if actor_role not in COURIER_ROLES:
        return DENY

    if current is StatusType.WAITING_FOR_COURIER:
        if requested is StatusType.PICKED_UP_BY_COURIER and not courier_assigned:
            return Allow(
                pushes=(StatusType.PICKED_UP_BY_COURIER,),
                courier=CourierChange.ASSIGN,
            )
        return DENY

    if not actor_is_courier_of_record:
        return DENY

    if current is StatusType.PICKED_UP_BY_COURIER:
        if requested is StatusType.ARRIVED_IN_DESTINATION:
            return Allow(
                pushes=(StatusType.ARRIVED_IN_DESTINATION,),
                courier=CourierChange.CLEAR,
                credit_merchant=True,
            )
        if requested is StatusType.SEND_BACK_TO_MERCHANT:
            return Allow(pushes=(StatusType.SEND_BACK_TO_MERCHANT,))
        return DENY

    if current is StatusType.SEND_BACK_TO_MERCHANT:
        if requested is StatusType.ARRIVED_IN_MERCHANT:
            return Allow(
                pushes=(StatusType.ARRIVED_IN_MERCHANT, StatusType.PROCESSING_IN_MERCHANT),
                courier=CourierChange.CLEAR,
            )
        return DENY

    return DENY
