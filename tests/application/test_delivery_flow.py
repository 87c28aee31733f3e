"""
Delivery state machine against a real database.

Walks orders through confirmation, pickup, delivery and the send-back
loop, and checks the merchant is credited exactly once.
"""
import asyncio
from decimal import Decimal

import pytest

from core.data.uow import create_uow
from core.domain.entities import LineItem
from core.domain.exceptions import ForbiddenError, NotFoundError
from core.domain.value_objects import StatusType, UserRole

S = StatusType


@pytest.fixture
def parties(seed):
    """Merchant, buyer and two couriers; the buyer can afford one 1000 order."""

    async def make():
        merchant = await seed.user("merchant")
        buyer = await seed.user("buyer", balance=1000)
        courier = await seed.user("courier", role=UserRole.COURIER)
        rival = await seed.user("rival", role=UserRole.COURIER)
        product = await seed.product(merchant, price=1000, stock=5)
        return merchant, buyer, courier, rival, product

    return make


async def _place(placement, buyer, product):
    dto = await placement.place_order(buyer.access(), [LineItem(product.id, 1)])
    return dto.id


def _types(order):
    return [entry.type for entry in order.status]


class TestHappyPath:

    @pytest.mark.asyncio
    async def test_delivery_credits_merchant_once(self, seed, parties, placement, delivery, event_bus):
        merchant, buyer, courier, _, product = await parties()
        order_id = await _place(placement, buyer, product)

        confirmed = await delivery.confirm_processing(merchant.access(), order_id)
        assert confirmed.status[-1].type is S.WAITING_FOR_COURIER

        await delivery.pickup(courier.access(), order_id)
        assert (await seed.order(order_id)).courier_id == courier.id

        await delivery.change_delivery(courier.access(), order_id, S.ARRIVED_IN_DESTINATION)

        order = await seed.order(order_id)
        assert _types(order) == [
            S.PROCESSING_IN_MERCHANT,
            S.WAITING_FOR_COURIER,
            S.PICKED_UP_BY_COURIER,
            S.ARRIVED_IN_DESTINATION,
        ]
        assert order.courier_id is None
        assert order.version == 3
        assert await seed.balance(merchant.id) == Decimal("1000")
        assert await seed.balance(buyer.id) == Decimal("0")
        assert event_bus.types().count("MerchantCreditedEvent") == 1

    @pytest.mark.asyncio
    async def test_second_arrival_report_is_rejected(self, seed, parties, placement, delivery):
        merchant, buyer, courier, _, product = await parties()
        order_id = await _place(placement, buyer, product)
        await delivery.confirm_processing(merchant.access(), order_id)
        await delivery.pickup(courier.access(), order_id)
        await delivery.change_delivery(courier.access(), order_id, S.ARRIVED_IN_DESTINATION)

        with pytest.raises(ForbiddenError):
            await delivery.change_delivery(courier.access(), order_id, S.ARRIVED_IN_DESTINATION)

        assert await seed.balance(merchant.id) == Decimal("1000")
        assert len((await seed.order(order_id)).status) == 4

    @pytest.mark.asyncio
    async def test_send_back_loop_returns_order_to_merchant(self, seed, parties, placement, delivery):
        merchant, buyer, courier, rival, product = await parties()
        order_id = await _place(placement, buyer, product)
        await delivery.confirm_processing(merchant.access(), order_id)
        await delivery.pickup(courier.access(), order_id)

        await delivery.change_delivery(courier.access(), order_id, S.SEND_BACK_TO_MERCHANT)
        assert (await seed.order(order_id)).courier_id == courier.id

        await delivery.change_delivery(courier.access(), order_id, S.ARRIVED_IN_MERCHANT)

        order = await seed.order(order_id)
        assert _types(order)[-3:] == [S.SEND_BACK_TO_MERCHANT, S.ARRIVED_IN_MERCHANT, S.PROCESSING_IN_MERCHANT]
        assert order.courier_id is None
        assert await seed.balance(merchant.id) == Decimal("0")

        # The loop can start over with another courier
        await delivery.confirm_processing(merchant.access(), order_id)
        await delivery.pickup(rival.access(), order_id)
        assert (await seed.order(order_id)).courier_id == rival.id

    @pytest.mark.asyncio
    async def test_admin_can_act_as_courier(self, seed, parties, placement, delivery):
        merchant, buyer, _, _, product = await parties()
        admin = await seed.user("admin", role=UserRole.ADMIN)
        order_id = await _place(placement, buyer, product)
        await delivery.confirm_processing(merchant.access(), order_id)

        await delivery.pickup(admin.access(), order_id)
        await delivery.change_delivery(admin.access(), order_id, S.ARRIVED_IN_DESTINATION)

        assert await seed.balance(merchant.id) == Decimal("1000")


class TestRejections:

    @pytest.mark.asyncio
    async def test_confirm_by_non_merchant(self, parties, placement, delivery):
        _, buyer, courier, _, product = await parties()
        order_id = await _place(placement, buyer, product)

        with pytest.raises(ForbiddenError):
            await delivery.confirm_processing(buyer.access(), order_id)
        with pytest.raises(ForbiddenError):
            await delivery.confirm_processing(courier.access(), order_id)

    @pytest.mark.asyncio
    async def test_pickup_before_confirmation(self, parties, placement, delivery):
        _, buyer, courier, _, product = await parties()
        order_id = await _place(placement, buyer, product)

        with pytest.raises(ForbiddenError):
            await delivery.pickup(courier.access(), order_id)

    @pytest.mark.asyncio
    async def test_customer_cannot_pick_up(self, parties, placement, delivery):
        merchant, buyer, _, _, product = await parties()
        order_id = await _place(placement, buyer, product)
        await delivery.confirm_processing(merchant.access(), order_id)

        with pytest.raises(ForbiddenError):
            await delivery.pickup(buyer.access(), order_id)

    @pytest.mark.asyncio
    async def test_only_courier_of_record_reports_progress(self, seed, parties, placement, delivery):
        merchant, buyer, courier, rival, product = await parties()
        order_id = await _place(placement, buyer, product)
        await delivery.confirm_processing(merchant.access(), order_id)
        await delivery.pickup(courier.access(), order_id)

        with pytest.raises(ForbiddenError):
            await delivery.change_delivery(rival.access(), order_id, S.ARRIVED_IN_DESTINATION)

        assert (await seed.order(order_id)).current_status() is S.PICKED_UP_BY_COURIER
        assert await seed.balance(merchant.id) == Decimal("0")

    @pytest.mark.asyncio
    async def test_unknown_order(self, parties, delivery):
        _, _, courier, _, _ = await parties()

        with pytest.raises(NotFoundError):
            await delivery.pickup(courier.access(), "no-such-order")


class TestPerOrderSerialization:
    """Two writers against one order: exactly one wins."""

    @pytest.mark.asyncio
    async def test_stale_version_is_not_written(self, seed, parties, placement, delivery, session_factory):
        merchant, buyer, courier, rival, product = await parties()
        order_id = await _place(placement, buyer, product)
        await delivery.confirm_processing(merchant.access(), order_id)

        first = await seed.order(order_id)
        second = await seed.order(order_id)

        async with create_uow(session_factory) as uow:
            assert await uow.orders.save_transition(first, first.pickup(courier.access()))
            await uow.commit()

        async with create_uow(session_factory) as uow:
            assert not await uow.orders.save_transition(second, second.pickup(rival.access()))

        order = await seed.order(order_id)
        assert order.courier_id == courier.id
        assert len(order.status) == 3

    @pytest.mark.asyncio
    async def test_concurrent_pickups(self, seed, parties, placement, delivery):
        merchant, buyer, courier, rival, product = await parties()
        order_id = await _place(placement, buyer, product)
        await delivery.confirm_processing(merchant.access(), order_id)

        results = await asyncio.gather(
            delivery.pickup(courier.access(), order_id),
            delivery.pickup(rival.access(), order_id),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], ForbiddenError)

        order = await seed.order(order_id)
        assert order.courier_id in (courier.id, rival.id)
        assert _types(order).count(S.PICKED_UP_BY_COURIER) == 1


class TestCourierViews:

    @pytest.mark.asyncio
    async def test_index_shows_waiting_and_own_orders(self, seed, parties, placement, delivery):
        merchant, buyer, courier, rival, product = await parties()
        richer = await seed.user("richer", balance=3000)
        held = await _place(placement, buyer, product)
        waiting = await _place(placement, richer, product)
        processing = await _place(placement, richer, product)
        await delivery.confirm_processing(merchant.access(), held)
        await delivery.confirm_processing(merchant.access(), waiting)
        await delivery.pickup(courier.access(), held)

        mine = {d.id for d in (await delivery.index_delivery(courier.access())).deliveries}
        theirs = {d.id for d in (await delivery.index_delivery(rival.access())).deliveries}

        assert mine == {held, waiting}
        assert theirs == {waiting}
        assert processing not in mine | theirs

    @pytest.mark.asyncio
    async def test_show_respects_visibility(self, parties, placement, delivery):
        merchant, buyer, courier, rival, product = await parties()
        order_id = await _place(placement, buyer, product)
        await delivery.confirm_processing(merchant.access(), order_id)

        assert (await delivery.show_delivery(rival.access(), order_id)).id == order_id

        await delivery.pickup(courier.access(), order_id)

        assert (await delivery.show_delivery(courier.access(), order_id)).courier_id == courier.id
        with pytest.raises(ForbiddenError):
            await delivery.show_delivery(rival.access(), order_id)

    @pytest.mark.asyncio
    async def test_customers_have_no_delivery_views(self, parties, placement, delivery):
        _, buyer, _, _, product = await parties()
        order_id = await _place(placement, buyer, product)

        with pytest.raises(ForbiddenError):
            await delivery.index_delivery(buyer.access())
        with pytest.raises(ForbiddenError):
            await delivery.show_delivery(buyer.access(), order_id)
