"""Merchant endpoints: incoming orders and their confirmation."""

from fastapi import APIRouter, Depends

from core.application.dtos import OrderDTO, OrderListDTO
from core.application.services import DeliveryService, OrderQueryService
from core.domain.value_objects import UserAccess

from apps.api.deps import get_current_user, get_delivery_service, get_order_query_service

router = APIRouter(prefix="/sales", tags=["sales"])


@router.get("", response_model=OrderListDTO)
async def index_sales(
    user: UserAccess = Depends(get_current_user),
    service: OrderQueryService = Depends(get_order_query_service),
) -> OrderListDTO:
    return await service.index_sales(user)


@router.get("/{order_id}", response_model=OrderDTO)
async def show_sale(
    order_id: str,
    user: UserAccess = Depends(get_current_user),
    service: OrderQueryService = Depends(get_order_query_service),
) -> OrderDTO:
    return await service.show_sale(user, order_id)


@router.post("/{order_id}/confirm", response_model=OrderDTO)
async def confirm_sale(
    order_id: str,
    user: UserAccess = Depends(get_current_user),
    service: DeliveryService = Depends(get_delivery_service),
) -> OrderDTO:
    """Hand a processed order over to couriers (merchant of record only)."""
    return await service.confirm_processing(user, order_id)
