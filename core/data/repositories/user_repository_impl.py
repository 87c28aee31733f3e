"""SQLAlchemy implementation of UserRepository."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.user import User
from core.domain.repositories.user_repository import UserRepository
from core.domain.value_objects import Money

from ..mappers import UserMapper
from ..models.user_model import UserModel


class SqlAlchemyUserRepository(UserRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, user: User) -> None:
        self._session.add(UserMapper.to_persistence(user))
        await self._session.flush()

    async def find_by_id(self, user_id: str) -> Optional[User]:
        result = await self._session.execute(
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return UserMapper.to_domain(model) if model else None

    async def read_balance(self, user_id: str) -> Optional[Money]:
        result = await self._session.execute(
            select(UserModel.balance).where(UserModel.id == user_id).with_for_update()
        )
        balance = result.scalar_one_or_none()
        return Money(amount=balance) if balance is not None else None

    async def compare_and_set_balance(self, user_id: str, expected: Money, new_balance: Money) -> bool:
        result = await self._session.execute(
            update(UserModel)
            .where(UserModel.id == user_id, UserModel.balance == expected.amount)
            .values(balance=new_balance.amount, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
