"""Shared helpers for application services: DTO assembly and event publishing."""

from typing import List

from core.application.dtos import (
    CartDTO,
    DeliveryDTO,
    OrderDTO,
    OrderProductDTO,
    StatusDTO,
)
from core.domain.entities import CartItem, Order
from core.domain.event_bus import EventBus
from core.domain.events.base import DomainEvent
from core.domain.value_objects import ExecutionID


def _status_dtos(order: Order) -> List[StatusDTO]:
    return [StatusDTO(type=entry.type, date=entry.date) for entry in order.status]


def order_to_dto(order: Order) -> OrderDTO:
    """Full order view (buyer and merchant projections)."""
    return OrderDTO(
        id=order.id,
        user_id=order.user_id,
        merchant_id=order.merchant_id,
        courier_id=order.courier_id,
        price=str(order.price),
        status=_status_dtos(order),
        products=[
            OrderProductDTO(id=item.product_id, quantity=str(item.quantity))
            for item in order.line_items
        ],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def delivery_to_dto(order: Order) -> DeliveryDTO:
    """Courier view of an order; line items are not exposed."""
    return DeliveryDTO(
        id=order.id,
        user_id=order.user_id,
        merchant_id=order.merchant_id,
        courier_id=order.courier_id,
        status=_status_dtos(order),
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def cart_to_dto(item: CartItem) -> CartDTO:
    return CartDTO(
        id=item.id,
        user_id=item.user_id,
        product_id=item.product_id,
        merchant_id=item.merchant_id,
        quantity=str(item.quantity),
    )


async def publish_committed(
    event_bus: EventBus,
    events: List[DomainEvent],
    execution_id: ExecutionID,
) -> None:
    """Publish events of a committed unit of work, stamped with its execution ID."""
    for event in events:
        event.execution_id = str(execution_id)
    await event_bus.publish_all(events)
