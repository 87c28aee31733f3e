"""Courier endpoints."""

from fastapi import APIRouter, Depends, status

from core.application.dtos import ChangeDeliveryRequest, DeliveryDTO, DeliveryListDTO
from core.application.services import DeliveryService
from core.domain.value_objects import UserAccess

from apps.api.deps import get_current_user, get_delivery_service

router = APIRouter(prefix="/deliveries", tags=["deliveries"])


@router.get("", response_model=DeliveryListDTO)
async def index_delivery(
    user: UserAccess = Depends(get_current_user),
    service: DeliveryService = Depends(get_delivery_service),
) -> DeliveryListDTO:
    """Orders waiting for a courier plus those the caller is delivering."""
    return await service.index_delivery(user)


@router.get("/{order_id}", response_model=DeliveryDTO)
async def show_delivery(
    order_id: str,
    user: UserAccess = Depends(get_current_user),
    service: DeliveryService = Depends(get_delivery_service),
) -> DeliveryDTO:
    return await service.show_delivery(user, order_id)


@router.post("/{order_id}/pickup", status_code=status.HTTP_204_NO_CONTENT)
async def pickup(
    order_id: str,
    user: UserAccess = Depends(get_current_user),
    service: DeliveryService = Depends(get_delivery_service),
) -> None:
    await service.pickup(user, order_id)


@router.patch("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def change_delivery(
    order_id: str,
    request: ChangeDeliveryRequest,
    user: UserAccess = Depends(get_current_user),
    service: DeliveryService = Depends(get_delivery_service),
) -> None:
    """Report delivery progress (courier of record only)."""
    await service.change_delivery(user, order_id, request.type)
