"""Delivery State Machine service."""

from typing import Callable, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos import DeliveryDTO, DeliveryListDTO, OrderDTO
from core.application.retry import RetryPolicy, run_with_retry
from core.data.uow import UnitOfWork, create_uow
from core.domain.entities import AppliedTransition, Order
from core.domain.event_bus import EventBus
from core.domain.exceptions import ConcurrencyError, ForbiddenError, NotFoundError
from core.domain.value_objects import StatusType, UserAccess
from core.infrastructure.logging import get_logger

from .common import delivery_to_dto, order_to_dto, publish_committed


logger = get_logger(__name__)


class DeliveryService:
    """
    Applies role-gated status transitions to orders.

    Every transition is written conditionally on the order version it was
    decided on, so two concurrent requests against one order can never both
    succeed. The loser is re-judged against the winner's state on retry.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        event_bus: EventBus,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        self._session_factory = session_factory
        self._event_bus = event_bus
        self._retry_policy = retry_policy or RetryPolicy()

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    async def confirm_processing(self, actor: UserAccess, order_id: str) -> OrderDTO:
        """Merchant of record moves ProcessingInMerchant -> WaitingForCourier."""
        order = await self._run(
            order_id,
            lambda order: order.confirm_processing(actor),
            "confirm_processing",
        )
        return order_to_dto(order)

    async def pickup(self, actor: UserAccess, order_id: str) -> None:
        """Courier claims a WaitingForCourier order nobody holds."""
        await self._run(order_id, lambda order: order.pickup(actor), "pickup")

    async def change_delivery(self, actor: UserAccess, order_id: str, requested: StatusType) -> None:
        """Courier of record reports progress; may credit the merchant."""
        await self._run(
            order_id,
            lambda order: order.change_delivery(actor, requested),
            "change_delivery",
        )

    async def _run(
        self,
        order_id: str,
        apply: Callable[[Order], AppliedTransition],
        name: str,
    ) -> Order:
        return await run_with_retry(
            lambda: self._attempt(order_id, apply, name),
            self._retry_policy,
            name,
        )

    async def _attempt(
        self,
        order_id: str,
        apply: Callable[[Order], AppliedTransition],
        name: str,
    ) -> Order:
        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id

            order = await uow.orders.find_by_id(order_id)
            if order is None:
                raise NotFoundError()

            previous = order.current_status()
            transition = apply(order)

            if not await uow.orders.save_transition(order, transition):
                raise ConcurrencyError(f"order {order_id} changed since it was read")

            if transition.decision.credit_merchant:
                await self._credit_merchant(uow, order)

            await uow.commit()

            events = order.get_domain_events()
            order.clear_domain_events()

        logger.info(
            f"[{execution_id}] {name} {order.id}: {previous.value} -> "
            f"{', '.join(entry.type.value for entry in transition.entries)}"
        )
        await publish_committed(self._event_bus, events, execution_id)
        return order

    async def _credit_merchant(self, uow: UnitOfWork, order: Order) -> None:
        balance = await uow.users.read_balance(order.merchant_id)
        if balance is None:
            raise NotFoundError("merchant not found")
        if not await uow.users.compare_and_set_balance(order.merchant_id, balance, balance + order.price):
            raise ConcurrencyError(f"balance of merchant {order.merchant_id} changed")

    # =========================================================================
    # COURIER PROJECTIONS
    # =========================================================================

    async def index_delivery(self, actor: UserAccess) -> DeliveryListDTO:
        """Orders waiting for any courier plus those held by ``actor``."""
        if not actor.can_deliver:
            raise ForbiddenError()

        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.find_deliverable_for(actor.id)
            return DeliveryListDTO(deliveries=[delivery_to_dto(order) for order in orders])

    async def show_delivery(self, actor: UserAccess, order_id: str) -> DeliveryDTO:
        if not actor.can_deliver:
            raise ForbiddenError()

        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_id(order_id)

        if order is None:
            raise NotFoundError()
        if order.current_status() is not StatusType.WAITING_FOR_COURIER and order.courier_id != actor.id:
            raise ForbiddenError()
        return delivery_to_dto(order)
