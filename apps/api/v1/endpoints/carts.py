"""Cart endpoints."""

from fastapi import APIRouter, Depends, status

from core.application.dtos import AddCartRequest, CartDTO, CartListDTO
from core.application.services import CartService
from core.domain.value_objects import UserAccess

from apps.api.deps import get_cart_service, get_current_user

router = APIRouter(prefix="/carts", tags=["carts"])


@router.get("", response_model=CartListDTO)
async def index_carts(
    user: UserAccess = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
) -> CartListDTO:
    return await service.index(user)


@router.post("", response_model=CartDTO)
async def add_to_cart(
    request: AddCartRequest,
    user: UserAccess = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
) -> CartDTO:
    return await service.add(user, request.product_id, request.quantity)


@router.get("/{cart_id}", response_model=CartDTO)
async def show_cart(
    cart_id: str,
    user: UserAccess = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
) -> CartDTO:
    return await service.show(user, cart_id)


@router.delete("/{cart_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_cart(
    cart_id: str,
    user: UserAccess = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
) -> None:
    await service.remove(user, cart_id)
