"""Buyer order endpoints."""

import logging

from fastapi import APIRouter, Depends

from core.application.dtos import OrderDTO, OrderListDTO, PlaceOrderRequest
from core.application.services import OrderPlacementService, OrderQueryService
from core.domain.entities import LineItem
from core.domain.value_objects import UserAccess

from apps.api.deps import get_current_user, get_order_placement_service, get_order_query_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderDTO)
async def place_order(
    request: PlaceOrderRequest,
    user: UserAccess = Depends(get_current_user),
    service: OrderPlacementService = Depends(get_order_placement_service),
) -> OrderDTO:
    """Place an order for products of a single merchant.

    Args:
        request: Requested products and quantities
        user: Authenticated buyer
        service: OrderPlacementService instance

    Returns:
        OrderDTO of the committed order
    """
    line_items = [
        LineItem(product_id=item.product_id, quantity=item.quantity)
        for item in request.line_items
    ]
    return await service.place_order(user, line_items)


@router.get("", response_model=OrderListDTO)
async def index_orders(
    user: UserAccess = Depends(get_current_user),
    service: OrderQueryService = Depends(get_order_query_service),
) -> OrderListDTO:
    return await service.index_orders(user)


@router.get("/{order_id}", response_model=OrderDTO)
async def show_order(
    order_id: str,
    user: UserAccess = Depends(get_current_user),
    service: OrderQueryService = Depends(get_order_query_service),
) -> OrderDTO:
    return await service.show_order(user, order_id)
