"""Read projections over orders for buyers and merchants."""

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos import OrderDTO, OrderListDTO
from core.data.uow import create_uow
from core.domain.exceptions import ForbiddenError, NotFoundError
from core.domain.value_objects import UserAccess

from .common import order_to_dto


class OrderQueryService:
    """Buyer ("orders") and merchant ("sales") views. Read-only."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def index_orders(self, actor: UserAccess) -> OrderListDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.find_by_buyer(actor.id)
            return OrderListDTO(orders=[order_to_dto(order) for order in orders])

    async def show_order(self, actor: UserAccess, order_id: str) -> OrderDTO:
        order = await self._get(order_id)
        if order.user_id != actor.id:
            raise ForbiddenError()
        return order_to_dto(order)

    async def index_sales(self, actor: UserAccess) -> OrderListDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.find_by_merchant(actor.id)
            return OrderListDTO(orders=[order_to_dto(order) for order in orders])

    async def show_sale(self, actor: UserAccess, order_id: str) -> OrderDTO:
        order = await self._get(order_id)
        if order.merchant_id != actor.id:
            raise ForbiddenError()
        return order_to_dto(order)

    async def _get(self, order_id: str):
        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError()
        return order
