"""Integration tests for order endpoints."""
from datetime import timedelta

import pytest

from core.domain.value_objects import UserRole
from core.infrastructure.security import create_access_token


class TestAuthentication:

    @pytest.mark.asyncio
    async def test_health_needs_no_token(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_missing_token(self, client):
        response = await client.get("/api/v1/orders")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_garbage_token(self, client):
        response = await client.get("/api/v1/orders", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_token(self, client, seed, app_settings):
        buyer = await seed.user("buyer")
        token = create_access_token(
            buyer.id, UserRole.CUSTOMER, app_settings.auth, expires_delta=timedelta(minutes=-5)
        )

        response = await client.get("/api/v1/orders", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401


class TestPlaceOrder:

    @pytest.mark.asyncio
    async def test_place_order(self, client, seed, auth):
        merchant = await seed.user("merchant")
        buyer = await seed.user("buyer", balance=2000)
        product = await seed.product(merchant, price=1000, stock=10)

        response = await client.post(
            "/api/v1/orders",
            json={"products": [{"id": product.id, "quantity": "2"}]},
            headers=auth(buyer),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["price"] == "2000"
        assert body["user_id"] == buyer.id
        assert body["merchant_id"] == merchant.id
        assert body["courier_id"] is None
        assert body["products"] == [{"id": product.id, "quantity": "2"}]
        assert [s["type"] for s in body["status"]] == ["ProcessingInMerchant"]

        listed = await client.get("/api/v1/orders", headers=auth(buyer))
        assert [o["id"] for o in listed.json()["orders"]] == [body["id"]]

        shown = await client.get(f"/api/v1/orders/{body['id']}", headers=auth(buyer))
        assert shown.json()["id"] == body["id"]

    @pytest.mark.asyncio
    async def test_place_order_with_line_items_body(self, client, seed, auth):
        merchant = await seed.user("merchant")
        buyer = await seed.user("buyer", balance=2000)
        keyboard = await seed.product(merchant, price=1000, stock=10, name="Keyboard")
        mouse = await seed.product(merchant, price=1000, stock=10, name="Mouse")

        response = await client.post(
            "/api/v1/orders",
            json={
                "line_items": [
                    {"product_id": keyboard.id, "quantity": 1},
                    {"product_id": mouse.id, "quantity": 1},
                ]
            },
            headers=auth(buyer),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["price"] == "2000"
        assert body["products"] == [
            {"id": keyboard.id, "quantity": "1"},
            {"id": mouse.id, "quantity": "1"},
        ]
        assert await seed.balance(buyer.id) == 0
        assert await seed.stock(keyboard.id) == 9
        assert await seed.stock(mouse.id) == 9

    @pytest.mark.asyncio
    async def test_insufficient_fund_is_402(self, client, seed, auth):
        merchant = await seed.user("merchant")
        buyer = await seed.user("buyer", balance=1000)
        product = await seed.product(merchant, price=1000, stock=10)

        response = await client.post(
            "/api/v1/orders",
            json={"products": [{"id": product.id, "quantity": 2}]},
            headers=auth(buyer),
        )

        assert response.status_code == 402
        assert response.json() == {
            "type": "InsufficientFund",
            "message": "Your balance is not sufficient to complete this transaction.",
        }

    @pytest.mark.asyncio
    async def test_mismatch_merchant_is_422(self, client, seed, auth):
        buyer = await seed.user("buyer", balance=1000)
        a = await seed.product(await seed.user("first"), price=1)
        b = await seed.product(await seed.user("second"), price=1)

        response = await client.post(
            "/api/v1/orders",
            json={"products": [{"id": a.id, "quantity": 1}, {"id": b.id, "quantity": 1}]},
            headers=auth(buyer),
        )

        assert response.status_code == 422
        assert response.json()["type"] == "MismatchMerchant"

    @pytest.mark.asyncio
    async def test_own_product_is_403(self, client, seed, auth):
        merchant = await seed.user("merchant", balance=5000)
        product = await seed.product(merchant, price=10)

        response = await client.post(
            "/api/v1/orders",
            json={"products": [{"id": product.id, "quantity": 1}]},
            headers=auth(merchant),
        )

        assert response.status_code == 403
        assert response.json()["type"] == "Forbidden"

    @pytest.mark.asyncio
    async def test_unknown_product_is_404(self, client, seed, auth):
        buyer = await seed.user("buyer", balance=1000)

        response = await client.post(
            "/api/v1/orders",
            json={"products": [{"id": "missing", "quantity": 1}]},
            headers=auth(buyer),
        )

        assert response.status_code == 404
        assert response.json()["type"] == "NotFound"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"products": []},
            {"line_items": []},
            {"products": [{"id": "x", "quantity": "many"}]},
            {},
        ],
    )
    async def test_malformed_requests_are_422(self, client, seed, auth, payload):
        buyer = await seed.user("buyer", balance=1000)

        response = await client.post("/api/v1/orders", json=payload, headers=auth(buyer))

        assert response.status_code == 422
        assert response.json()["type"] == "ValidationError"
