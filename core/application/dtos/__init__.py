"""Application DTOs."""

from .cart_dto import AddCartRequest, CartDTO, CartListDTO
from .order_dto import (
    ChangeDeliveryRequest,
    DeliveryDTO,
    DeliveryListDTO,
    LineItemRequest,
    OrderDTO,
    OrderListDTO,
    OrderProductDTO,
    PlaceOrderRequest,
    StatusDTO,
)

__all__ = [
    "AddCartRequest",
    "CartDTO",
    "CartListDTO",
    "ChangeDeliveryRequest",
    "DeliveryDTO",
    "DeliveryListDTO",
    "LineItemRequest",
    "OrderDTO",
    "OrderListDTO",
    "OrderProductDTO",
    "PlaceOrderRequest",
    "StatusDTO",
]
