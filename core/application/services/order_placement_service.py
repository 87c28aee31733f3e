"""Order Placement Engine."""

from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos import OrderDTO
from core.application.retry import RetryPolicy, run_with_retry
from core.data.uow import UnitOfWork, create_uow
from core.domain.entities import LineItem, Order
from core.domain.event_bus import EventBus
from core.domain.exceptions import (
    ConcurrencyError,
    ForbiddenError,
    InsufficientFundError,
    NotFoundError,
)
from core.domain.value_objects import UserAccess
from core.infrastructure.logging import get_logger

from .common import order_to_dto, publish_committed


logger = get_logger(__name__)


class OrderPlacementService:
    """
    Turns an order request into a durable Order.

    Responsibilities:
    - Validate the request against current products and buyer balance
    - Commit order creation, balance debit and stock decrement atomically
    - Retry from scratch when a concurrent writer changed what was read
    - Publish domain events after commit
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        event_bus: EventBus,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        """Initialize order placement service.

        Args:
            session_factory: SQLAlchemy async session factory
            event_bus: Bus receiving events after commit
            retry_policy: Attempts allowed when a write race is lost
        """
        self._session_factory = session_factory
        self._event_bus = event_bus
        self._retry_policy = retry_policy or RetryPolicy()

    async def place_order(self, buyer: UserAccess, line_items: Sequence[LineItem]) -> OrderDTO:
        """Place an order for ``buyer``.

        Args:
            buyer: Authenticated caller
            line_items: Requested products and quantities

        Returns:
            OrderDTO of the committed order

        Raises:
            DomainValidationError: Empty request
            NotFoundError: Unknown product
            MismatchMerchantError: Products from several merchants
            ForbiddenError: Own product, non-positive quantity, stock exceeded,
                or every retry lost a race
            InsufficientFundError: Balance lower than the price
        """
        order = await run_with_retry(
            lambda: self._attempt(buyer, line_items),
            self._retry_policy,
            "place_order",
        )
        return order_to_dto(order)

    async def _attempt(self, buyer: UserAccess, line_items: Sequence[LineItem]) -> Order:
        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id

            # 1. Validation phase: nothing written yet
            user = await uow.users.find_by_id(buyer.id)
            if user is None:
                raise NotFoundError("user not found")

            products = await uow.products.find_many(item.product_id for item in line_items)
            order = Order.place(user, line_items, products)

            logger.info(
                f"[{execution_id}] Placing order {order.id}: buyer={user.id} "
                f"merchant={order.merchant_id} price={order.price} items={len(order.line_items)}"
            )

            # 2. Atomic commit phase
            await self._commit_phase(uow, order)

            events = order.get_domain_events()
            order.clear_domain_events()

        logger.info(f"[{execution_id}] Order {order.id} committed")
        await publish_committed(self._event_bus, events, execution_id)
        return order

    async def _commit_phase(self, uow: UnitOfWork, order: Order) -> None:
        """Insert the order, debit the buyer and decrement stock, then commit.

        Balance and stock are re-read here and written back only if unchanged
        since that read. Any exception leaves the transaction uncommitted.
        """
        await uow.orders.add(order)

        balance = await uow.users.read_balance(order.user_id)
        if balance is None:
            raise NotFoundError("user not found")
        if not balance.covers(order.price):
            raise InsufficientFundError()
        if not await uow.users.compare_and_set_balance(order.user_id, balance, balance - order.price):
            raise ConcurrencyError(f"balance of user {order.user_id} changed")

        # Duplicated products are handled line by line against a fresh read
        for item in order.line_items:
            stock = await uow.products.read_stock(item.product_id)
            if stock is None:
                raise NotFoundError(f"product not found: {item.product_id}")
            remaining = stock - item.quantity
            if remaining < 0:
                raise ForbiddenError("quantity exceeds stock")
            if not await uow.products.compare_and_set_stock(item.product_id, stock, remaining):
                raise ConcurrencyError(f"stock of product {item.product_id} changed")

        await uow.commit()
