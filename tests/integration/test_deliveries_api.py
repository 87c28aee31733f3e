"""Integration tests for sales confirmation and courier endpoints."""
import pytest

from core.domain.value_objects import UserRole


@pytest.fixture
def placed(client, seed, auth):
    """Place one 1000 order; returns (merchant, buyer, courier, order_id)."""

    async def make():
        merchant = await seed.user("merchant")
        buyer = await seed.user("buyer", balance=1000)
        courier = await seed.user("courier", role=UserRole.COURIER)
        product = await seed.product(merchant, price=1000, stock=1)
        response = await client.post(
            "/api/v1/orders",
            json={"products": [{"id": product.id, "quantity": 1}]},
            headers=auth(buyer),
        )
        assert response.status_code == 200
        return merchant, buyer, courier, response.json()["id"]

    return make


@pytest.mark.asyncio
async def test_full_delivery_over_http(client, seed, auth, placed):
    merchant, buyer, courier, order_id = await placed()

    sales = await client.get("/api/v1/sales", headers=auth(merchant))
    assert [o["id"] for o in sales.json()["orders"]] == [order_id]

    confirmed = await client.post(f"/api/v1/sales/{order_id}/confirm", headers=auth(merchant))
    assert confirmed.status_code == 200
    assert confirmed.json()["status"][-1]["type"] == "WaitingForCourier"

    deliveries = await client.get("/api/v1/deliveries", headers=auth(courier))
    assert [d["id"] for d in deliveries.json()["deliveries"]] == [order_id]
    assert "products" not in deliveries.json()["deliveries"][0]

    pickup = await client.post(f"/api/v1/deliveries/{order_id}/pickup", headers=auth(courier))
    assert pickup.status_code == 204

    arrived = await client.patch(
        f"/api/v1/deliveries/{order_id}",
        json={"type": "ArrivedInDestination"},
        headers=auth(courier),
    )
    assert arrived.status_code == 204

    again = await client.patch(
        f"/api/v1/deliveries/{order_id}",
        json={"type": "ArrivedInDestination"},
        headers=auth(courier),
    )
    assert again.status_code == 403

    assert str(await seed.balance(merchant.id)) == "1000"
    shown = await client.get(f"/api/v1/orders/{order_id}", headers=auth(buyer))
    assert [s["type"] for s in shown.json()["status"]] == [
        "ProcessingInMerchant",
        "WaitingForCourier",
        "PickedUpByCourier",
        "ArrivedInDestination",
    ]


@pytest.mark.asyncio
async def test_confirm_by_buyer_is_forbidden(client, auth, placed):
    _, buyer, _, order_id = await placed()

    response = await client.post(f"/api/v1/sales/{order_id}/confirm", headers=auth(buyer))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_customer_cannot_list_deliveries(client, auth, placed):
    _, buyer, _, _ = await placed()

    response = await client.get("/api/v1/deliveries", headers=auth(buyer))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_unknown_status_name_is_422(client, auth, placed):
    _, _, courier, order_id = await placed()

    response = await client.patch(
        f"/api/v1/deliveries/{order_id}",
        json={"type": "Teleported"},
        headers=auth(courier),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_pickup_unknown_order_is_404(client, seed, auth):
    courier = await seed.user("courier", role=UserRole.COURIER)

    response = await client.post("/api/v1/deliveries/missing/pickup", headers=auth(courier))

    assert response.status_code == 404
