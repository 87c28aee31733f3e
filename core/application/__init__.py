"""Application layer - services, DTOs and retry policy."""

from .dtos import ChangeDeliveryRequest, DeliveryDTO, OrderDTO, PlaceOrderRequest
from .retry import RetryPolicy
from .services import CartService, DeliveryService, OrderPlacementService, OrderQueryService

__all__ = [
    # DTOs
    "ChangeDeliveryRequest",
    "DeliveryDTO",
    "OrderDTO",
    "PlaceOrderRequest",
    # Services
    "CartService",
    "DeliveryService",
    "OrderPlacementService",
    "OrderQueryService",
    # Retry
    "RetryPolicy",
]
