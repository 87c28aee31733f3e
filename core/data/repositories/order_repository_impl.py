"""SQLAlchemy implementation of OrderRepository."""

from typing import List, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.domain.entities.order import AppliedTransition, Order
from core.domain.repositories.order_repository import OrderRepository
from core.domain.value_objects import StatusType

from ..mappers import OrderMapper
from ..models.order_model import OrderModel


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    def _live(self):
        return (
            select(OrderModel)
            .options(selectinload(OrderModel.items), selectinload(OrderModel.statuses))
            .where(OrderModel.deleted_at.is_(None))
            .execution_options(populate_existing=True)
        )

    async def add(self, order: Order) -> None:
        self._session.add(OrderMapper.to_persistence(order))
        await self._session.flush()  # Propagate to DB without committing

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """Retrieve a live order by identifier.

        Args:
            order_id: Order identifier

        Returns:
            Order if found, None otherwise
        """
        result = await self._session.execute(self._live().where(OrderModel.id == order_id))
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model)

    async def find_by_buyer(self, user_id: str) -> List[Order]:
        result = await self._session.execute(
            self._live().where(OrderModel.user_id == user_id).order_by(OrderModel.created_at)
        )
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def find_by_merchant(self, merchant_id: str) -> List[Order]:
        result = await self._session.execute(
            self._live().where(OrderModel.merchant_id == merchant_id).order_by(OrderModel.created_at)
        )
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def find_deliverable_for(self, courier_id: str) -> List[Order]:
        result = await self._session.execute(
            self._live()
            .where(
                or_(
                    OrderModel.current_status == StatusType.WAITING_FOR_COURIER.value,
                    OrderModel.courier_id == courier_id,
                )
            )
            .order_by(OrderModel.created_at)
        )
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def save_transition(self, order: Order, transition: AppliedTransition) -> bool:
        """Write the transition guarded by the version it was decided on.

        Args:
            order: Order with the transition already applied
            transition: New history entries and the expected stored version

        Returns:
            False if another writer got there first (nothing written)
        """
        result = await self._session.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order.id,
                OrderModel.version == transition.expected_version,
                OrderModel.deleted_at.is_(None),
            )
            .values(
                current_status=order.current_status().value,
                courier_id=order.courier_id,
                version=order.version,
                updated_at=order.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False

        start = len(order.status) - len(transition.entries)
        self._session.add_all(
            OrderMapper.status_models(order.id, list(transition.entries), start=start)
        )
        await self._session.flush()
        return True
