"""SQLAlchemy implementation of CartRepository."""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.cart import CartItem
from core.domain.repositories.cart_repository import CartRepository

from ..mappers import CartMapper
from ..models.cart_model import CartModel


class SqlAlchemyCartRepository(CartRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def upsert(self, item: CartItem) -> CartItem:
        result = await self._session.execute(
            select(CartModel).where(
                CartModel.user_id == item.user_id,
                CartModel.product_id == item.product_id,
            )
        )
        existing = result.scalar_one_or_none()

        if existing:
            existing.quantity = item.quantity
            existing.merchant_id = item.merchant_id
            model = existing
        else:
            model = CartMapper.to_persistence(item)
            self._session.add(model)

        await self._session.flush()
        return CartMapper.to_domain(model)

    async def find_by_id(self, cart_id: str) -> Optional[CartItem]:
        model = await self._session.get(CartModel, cart_id)
        return CartMapper.to_domain(model) if model else None

    async def find_by_user(self, user_id: str) -> List[CartItem]:
        result = await self._session.execute(
            select(CartModel).where(CartModel.user_id == user_id).order_by(CartModel.id)
        )
        return [CartMapper.to_domain(model) for model in result.scalars().all()]

    async def delete(self, cart_id: str) -> None:
        await self._session.execute(delete(CartModel).where(CartModel.id == cart_id))
        await self._session.flush()
