"""
Order aggregate root.

Created only by placement (``Order.place``), mutated only by delivery
transitions. The status history is append-only; its last entry is the
authoritative current state.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..events.base import DomainEvent
from ..exceptions import (
    DomainValidationError,
    ForbiddenError,
    InsufficientFundError,
    MismatchMerchantError,
    NotFoundError,
)
from ..services.delivery_rules import Allow, CourierChange, Deny, decide_transition
from ..value_objects import IN_TRANSIT, Money, StatusEntry, StatusType, UserAccess, new_id
from .product import Product
from .user import User


INITIAL_STATUS = StatusType.PROCESSING_IN_MERCHANT


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LineItem:
    """Product reference and quantity; quantity is an unbounded int."""
    product_id: str
    quantity: int


class StatusHistory:
    """
    Append-only sequence of status entries.

    Use ``current()`` for the order state; earlier entries are audit trail.
    """

    def __init__(self, entries: Iterable[StatusEntry]):
        self._entries: List[StatusEntry] = list(entries)
        if not self._entries:
            raise ValueError("Status history cannot be empty")

    @classmethod
    def start(cls, status: StatusType, at: datetime) -> "StatusHistory":
        return cls([StatusEntry(type=status, date=at)])

    def current(self) -> StatusType:
        """Current state of the order."""
        return self._entries[-1].type

    def append(self, status: StatusType, at: datetime) -> StatusEntry:
        entry = StatusEntry(type=status, date=at)
        self._entries.append(entry)
        return entry

    def __iter__(self) -> Iterator[StatusEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> StatusEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"StatusHistory({[e.type.value for e in self._entries]})"


@dataclass(frozen=True)
class AppliedTransition:
    """Outcome of a legal transition, as the repository needs to persist it."""
    decision: Allow
    entries: Tuple[StatusEntry, ...]
    expected_version: int


@dataclass
class Order:
    """
    A buyer's purchase of one merchant's products.

    ``version`` is the persisted revision; every transition bumps it and the
    repository only writes when the stored revision still matches.
    """
    user_id: str
    merchant_id: str
    price: Money
    line_items: Tuple[LineItem, ...]
    status: StatusHistory
    id: str = field(default_factory=new_id)
    courier_id: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    version: int = 0

    _domain_events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        if self.courier_id is not None and self.current_status() not in IN_TRANSIT:
            raise ValueError(
                f"Order {self.id} has a courier while {self.current_status().value}"
            )

    # =========================================================================
    # PLACEMENT
    # =========================================================================

    @classmethod
    def place(
        cls,
        buyer: User,
        line_items: Sequence[LineItem],
        products: Mapping[str, Product],
        now: Optional[datetime] = None,
    ) -> "Order":
        """
        Validate an order request and build the new aggregate.

        Checks run in a fixed order and each one aborts before any write.
        Stock is NOT checked here: it is re-read inside the commit
        transaction, where it cannot go stale.

        Args:
            buyer: Buyer with the balance read for this request
            line_items: Requested (product, quantity) pairs
            products: Products resolved by id (soft-deleted ones absent)
            now: Creation time (defaults to current UTC time)

        Returns:
            New Order in ``ProcessingInMerchant`` with no courier

        Raises:
            DomainValidationError: No line items
            NotFoundError: A referenced product does not exist
            MismatchMerchantError: Products belong to several merchants
            ForbiddenError: Buyer owns the products, or a quantity is not positive
            InsufficientFundError: Balance lower than the total price
        """
        if not line_items:
            raise DomainValidationError("order must contain at least one product")

        missing = [item.product_id for item in line_items if item.product_id not in products]
        if missing:
            raise NotFoundError(f"product not found: {missing[0]}")

        merchants = {products[item.product_id].merchant_id for item in line_items}
        if len(merchants) > 1:
            raise MismatchMerchantError()
        merchant_id = merchants.pop()

        if merchant_id == buyer.id:
            raise ForbiddenError("cannot buy own product")

        if any(item.quantity <= 0 for item in line_items):
            raise ForbiddenError("quantity must be greater than zero")

        price = Money.zero()
        for item in line_items:
            price = price + products[item.product_id].price * item.quantity

        if not buyer.balance.covers(price):
            raise InsufficientFundError()

        now = now or utc_now()
        order = cls(
            user_id=buyer.id,
            merchant_id=merchant_id,
            price=price,
            line_items=tuple(line_items),
            status=StatusHistory.start(INITIAL_STATUS, now),
            created_at=now,
            updated_at=now,
        )

        from ..events.order_events import OrderPlacedEvent

        order._record_event(
            OrderPlacedEvent(
                order_id=order.id,
                user_id=buyer.id,
                merchant_id=merchant_id,
                price=price.amount,
                line_items_count=len(order.line_items),
            )
        )
        return order

    def quantities(self) -> Dict[str, int]:
        """Total quantity requested per product (line items may repeat a product)."""
        totals: Dict[str, int] = {}
        for item in self.line_items:
            totals[item.product_id] = totals.get(item.product_id, 0) + item.quantity
        return totals

    # =========================================================================
    # DELIVERY TRANSITIONS
    # =========================================================================

    def current_status(self) -> StatusType:
        return self.status.current()

    def confirm_processing(self, actor: UserAccess, now: Optional[datetime] = None) -> AppliedTransition:
        """Merchant hands the order over to couriers."""
        return self._transition(actor, StatusType.WAITING_FOR_COURIER, now)

    def pickup(self, actor: UserAccess, now: Optional[datetime] = None) -> AppliedTransition:
        """Courier claims an order waiting for pickup."""
        return self._transition(actor, StatusType.PICKED_UP_BY_COURIER, now)

    def change_delivery(
        self,
        actor: UserAccess,
        requested: StatusType,
        now: Optional[datetime] = None,
    ) -> AppliedTransition:
        """Courier of record reports delivery progress."""
        if self.courier_id is None or self.courier_id != actor.id:
            raise ForbiddenError()
        return self._transition(actor, requested, now)

    def _transition(
        self,
        actor: UserAccess,
        requested: StatusType,
        now: Optional[datetime],
    ) -> AppliedTransition:
        previous = self.current_status()
        decision = decide_transition(
            previous,
            requested,
            actor.role,
            self.courier_id is not None and self.courier_id == actor.id,
            actor_is_merchant_of_record=self.merchant_id == actor.id,
            courier_assigned=self.courier_id is not None,
        )
        if isinstance(decision, Deny):
            raise ForbiddenError()

        now = now or utc_now()
        entries = tuple(self.status.append(status, now) for status in decision.pushes)

        if decision.courier is CourierChange.ASSIGN:
            self.courier_id = actor.id
        elif decision.courier is CourierChange.CLEAR:
            self.courier_id = None

        expected_version = self.version
        self.version += 1
        self.updated_at = now

        self._record_status_change(previous, entries, actor.id)
        if decision.credit_merchant:
            self._record_merchant_credit()

        return AppliedTransition(
            decision=decision,
            entries=entries,
            expected_version=expected_version,
        )

    # =========================================================================
    # EVENT COLLECTION
    # =========================================================================

    def get_domain_events(self) -> List[DomainEvent]:
        """
        Get all domain events collected by this aggregate.

        Returns:
            List of domain events (will be published to Event Bus)
        """
        return list(self._domain_events)

    def clear_domain_events(self) -> None:
        """Clear all collected domain events (after publishing)."""
        self._domain_events.clear()

    def _record_status_change(
        self,
        previous: StatusType,
        entries: Tuple[StatusEntry, ...],
        actor_id: str,
    ) -> None:
        from ..events.order_events import OrderStatusChangedEvent

        self._record_event(
            OrderStatusChangedEvent(
                order_id=self.id,
                user_id=actor_id,
                previous_status=previous.value,
                pushed=[entry.type.value for entry in entries],
                courier_id=self.courier_id,
            )
        )

    def _record_merchant_credit(self) -> None:
        from ..events.order_events import MerchantCreditedEvent

        self._record_event(
            MerchantCreditedEvent(
                order_id=self.id,
                merchant_id=self.merchant_id,
                amount=self.price.amount,
            )
        )

    def _record_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)
