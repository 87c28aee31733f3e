"""Application services."""
from .cart_service import CartService
from .delivery_service import DeliveryService
from .order_placement_service import OrderPlacementService
from .order_query_service import OrderQueryService

__all__ = ["CartService", "DeliveryService", "OrderPlacementService", "OrderQueryService"]
