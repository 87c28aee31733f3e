"""Shared fixtures: every test gets its own SQLite database file."""

from decimal import Decimal
from typing import List, Optional, Union

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from core.data.models import Base, OrderModel
from core.data.uow import create_uow
from core.domain.entities import Order, Product, User
from core.domain.event_bus import EventBus
from core.domain.events.base import DomainEvent
from core.domain.value_objects import Money, UserRole, new_id
from core.infrastructure.database.config import get_session_factory


class FakeEventBus(EventBus):
    """Fake Event Bus that records what was published."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    async def publish(self, event: DomainEvent) -> None:
        self.events.append(event)

    async def publish_all(self, events: List[DomainEvent]) -> None:
        for event in events:
            await self.publish(event)

    def types(self) -> List[str]:
        return [event.event_type for event in self.events]


class Seeder:
    """Writes collaborator records (users, products) and reads back state."""

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def user(
        self,
        name: str = "buyer",
        role: UserRole = UserRole.CUSTOMER,
        balance: Union[str, int] = 0,
    ) -> User:
        user = User(
            name=name,
            email=f"{name}-{new_id()[:8]}@example.com",
            role=role,
            balance=Money(Decimal(str(balance))),
        )
        async with create_uow(self._session_factory) as uow:
            await uow.users.add(user)
            await uow.commit()
        return user

    async def product(
        self,
        merchant: User,
        price: Union[str, int] = 1000,
        stock: int = 10,
        name: str = "Keyboard",
    ) -> Product:
        product = Product(
            user_id=merchant.id,
            name=name,
            price=Money(Decimal(str(price))),
            stock=stock,
        )
        async with create_uow(self._session_factory) as uow:
            await uow.products.add(product)
            await uow.commit()
        return product

    async def balance(self, user_id: str) -> Decimal:
        async with create_uow(self._session_factory) as uow:
            user = await uow.users.find_by_id(user_id)
        return user.balance.amount

    async def stock(self, product_id: str) -> int:
        async with create_uow(self._session_factory) as uow:
            product = await uow.products.find_by_id(product_id)
        return product.stock

    async def order(self, order_id: str) -> Optional[Order]:
        async with create_uow(self._session_factory) as uow:
            return await uow.orders.find_by_id(order_id)

    async def order_count(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(select(func.count()).select_from(OrderModel))
            return result.scalar_one()


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Create a fresh database file and schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine) -> async_sessionmaker:
    return get_session_factory(engine)


@pytest.fixture
def event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def seed(session_factory) -> Seeder:
    return Seeder(session_factory)
