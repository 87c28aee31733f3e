"""Cart operations."""

import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos import CartDTO, CartListDTO
from core.data.uow import create_uow
from core.domain.entities import CartItem
from core.domain.exceptions import ForbiddenError, NotFoundError
from core.domain.value_objects import UserAccess

from .common import cart_to_dto


logger = logging.getLogger(__name__)


class CartService:
    """A user's pending product selections, one row per product."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def add(self, actor: UserAccess, product_id: str, quantity: int) -> CartDTO:
        """Put ``quantity`` of a product in the cart, replacing any earlier quantity.

        Raises:
            ForbiddenError: Quantity not positive or above current stock
            NotFoundError: Unknown product
        """
        if quantity <= 0:
            raise ForbiddenError("quantity must be greater than zero")

        uow = create_uow(self._session_factory)
        async with uow:
            product = await uow.products.find_by_id(product_id)
            if product is None:
                raise NotFoundError(f"product not found: {product_id}")
            if not product.has_stock_for(quantity):
                raise ForbiddenError("quantity exceeds stock")

            item = await uow.carts.upsert(
                CartItem(
                    user_id=actor.id,
                    product_id=product.id,
                    merchant_id=product.merchant_id,
                    quantity=quantity,
                )
            )
            await uow.commit()

        logger.info(f"Cart {item.id}: user={actor.id} product={product_id} quantity={quantity}")
        return cart_to_dto(item)

    async def index(self, actor: UserAccess) -> CartListDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            items = await uow.carts.find_by_user(actor.id)
            return CartListDTO(carts=[cart_to_dto(item) for item in items])

    async def show(self, actor: UserAccess, cart_id: str) -> CartDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            item = await uow.carts.find_by_id(cart_id)

        if item is None or item.user_id != actor.id:
            raise ForbiddenError()
        return cart_to_dto(item)

    async def remove(self, actor: UserAccess, cart_id: str) -> None:
        uow = create_uow(self._session_factory)
        async with uow:
            item = await uow.carts.find_by_id(cart_id)
            if item is None:
                raise NotFoundError()
            if item.user_id != actor.id:
                raise ForbiddenError()

            await uow.carts.delete(cart_id)
            await uow.commit()

        logger.info(f"Cart {cart_id} removed by user {actor.id}")
