"""Order status value objects."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class StatusType(str, Enum):
    """
    Order status tags.

    Values are the wire/storage names and MUST stay stable.
    """

    WAITING_FOR_MERCHANT_CONFIRMATION = "WaitingForMerchantConfirmation"
    PROCESSING_IN_MERCHANT = "ProcessingInMerchant"
    WAITING_FOR_COURIER = "WaitingForCourier"
    PICKED_UP_BY_COURIER = "PickedUpByCourier"
    ARRIVED_IN_DESTINATION = "ArrivedInDestination"
    SEND_BACK_TO_MERCHANT = "SendBackToMerchant"
    ARRIVED_IN_MERCHANT = "ArrivedInMerchant"
    ARRIVED_IN_DESTINATION_CONFIRMED = "ArrivedInDestinationConfirmed"


# States during which an order is held by a courier
IN_TRANSIT = frozenset({
    StatusType.PICKED_UP_BY_COURIER,
    StatusType.SEND_BACK_TO_MERCHANT,
})


@dataclass(frozen=True)
class StatusEntry:
    """One entry of an order's status history."""
    type: StatusType
    date: datetime
