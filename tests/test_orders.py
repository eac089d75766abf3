"""Tests for the order lifecycle endpoints."""

import pytest


def place(client, order_id="X1", amount=42, user_name="alice"):
    return client.post(
        "/orders",
        json={"orderAmount": amount, "orderId": order_id, "userName": user_name},
    )


class TestPlaceOrder:
    def test_requires_session(self, client):
        response = place(client)
        assert response.status_code == 401
        assert response.json()["code"] == "unauthenticated"

    def test_example_flow(self, client, alice):
        response = place(client, "X1", 42)
        assert response.status_code == 201
        order = response.json()
        assert order["orderId"] == "X1"
        assert order["orderAmount"] == 42
        assert order["userName"] == "alice"
        assert order["orderedBy"] == alice
        assert order["orderStatus"] == "placed"

        response = client.get("/orders")
        assert response.status_code == 200
        orders = response.json()
        assert len(orders) == 1
        assert orders[0]["orderId"] == "X1"

    def test_ordered_by_comes_from_session(self, client, alice):
        # Client-supplied ownership fields are ignored
        response = client.post(
            "/orders",
            json={"orderAmount": 10, "orderId": "X2", "userName": "alice", "orderedBy": 999},
        )
        assert response.status_code == 201
        assert response.json()["orderedBy"] == alice

    def test_duplicate_order_id(self, client, alice):
        assert place(client, "X1").status_code == 201
        response = place(client, "X1")
        assert response.status_code == 409
        assert response.json()["code"] == "duplicate_order"

    def test_missing_amount(self, client, alice):
        response = client.post("/orders", json={"orderId": "X1", "userName": "alice"})
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    def test_negative_amount(self, client, alice):
        assert place(client, "X1", -5).status_code == 422

    def test_infinite_amount_rejected(self, client, alice):
        response = client.post(
            "/orders",
            content='{"orderAmount": Infinity, "orderId": "INF", "userName": "alice"}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"
        assert client.get("/orders").json() == []

    def test_admin_session_cannot_place_orders(self, client, login_admin):
        login_admin()
        response = place(client)
        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"


class TestListOrders:
    def test_requires_session(self, client):
        assert client.get("/orders").status_code == 401

    def test_only_own_orders(self, client, register, login):
        alice_id = register("alice", "pw1")
        bob_id = register("bob", "pw2")

        login("alice", "pw1")
        place(client, "A1", 10, "alice")
        place(client, "A2", 20, "alice")

        login("bob", "pw2")
        place(client, "B1", 30, "bob")

        response = client.get("/orders")
        assert [o["orderId"] for o in response.json()] == ["B1"]
        assert all(o["orderedBy"] == bob_id for o in response.json())

        login("alice", "pw1")
        response = client.get("/orders")
        assert [o["orderId"] for o in response.json()] == ["A1", "A2"]
        assert all(o["orderedBy"] == alice_id for o in response.json())

    def test_admin_lists_all(self, client, register, login, login_admin):
        register("alice", "pw1")
        register("bob", "pw2")
        login("alice", "pw1")
        place(client, "A1")
        login("bob", "pw2")
        place(client, "B1", user_name="bob")

        login_admin()
        response = client.get("/admin/orders")
        assert response.status_code == 200
        assert [o["orderId"] for o in response.json()] == ["A1", "B1"]

    def test_all_orders_forbidden_for_users(self, client, alice):
        response = client.get("/admin/orders")
        assert response.status_code == 403


class TestUpdateStatus:
    @pytest.fixture
    def placed_order(self, client, alice, login_admin):
        assert place(client, "X1", 42).status_code == 201
        login_admin()
        return "X1"

    def test_admin_updates_status(self, client, placed_order):
        response = client.put(f"/orders/{placed_order}", json={"orderStatus": "shipped"})
        assert response.status_code == 200
        assert response.json()["orderStatus"] == "shipped"

        orders = client.get("/admin/orders").json()
        assert orders[0]["orderStatus"] == "shipped"

    def test_unknown_order_not_found(self, client, placed_order):
        response = client.put("/orders/missing", json={"orderStatus": "shipped"})
        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_unknown_status_rejected(self, client, placed_order):
        response = client.put(f"/orders/{placed_order}", json={"orderStatus": "lost"})
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    def test_backwards_transition_rejected(self, client, placed_order):
        client.put(f"/orders/{placed_order}", json={"orderStatus": "shipped"})
        response = client.put(f"/orders/{placed_order}", json={"orderStatus": "processing"})
        assert response.status_code == 409
        assert response.json()["code"] == "invalid_transition"

    def test_terminal_status(self, client, placed_order):
        client.put(f"/orders/{placed_order}", json={"orderStatus": "delivered"})
        response = client.put(f"/orders/{placed_order}", json={"orderStatus": "cancelled"})
        assert response.status_code == 409

    def test_same_status_is_noop(self, client, placed_order):
        client.put(f"/orders/{placed_order}", json={"orderStatus": "processing"})
        response = client.put(f"/orders/{placed_order}", json={"orderStatus": "processing"})
        assert response.status_code == 200
        assert response.json()["orderStatus"] == "processing"

    def test_users_cannot_update_status(self, client, alice):
        place(client, "X1")
        response = client.put("/orders/X1", json={"orderStatus": "delivered"})
        assert response.status_code == 403

    def test_anonymous_cannot_update_status(self, client):
        response = client.put("/orders/X1", json={"orderStatus": "delivered"})
        assert response.status_code == 401


class TestShippedSummary:
    def test_counts_and_sums_shipped_orders(self, client, alice, login_admin):
        place(client, "X1", 42)
        place(client, "X2", 8.5)
        place(client, "X3", 100)

        login_admin()
        client.put("/orders/X1", json={"orderStatus": "shipped"})
        client.put("/orders/X2", json={"orderStatus": "shipped"})
        client.put("/orders/X3", json={"orderStatus": "delivered"})

        response = client.get("/api/getTotalShippedOrders")
        assert response.status_code == 200
        assert response.json() == {"count": 2, "totalAmount": 50.5}

    def test_empty(self, client, login_admin):
        login_admin()
        response = client.get("/api/getTotalShippedOrders")
        assert response.json() == {"count": 0, "totalAmount": 0.0}

    def test_requires_admin(self, client, alice):
        assert client.get("/api/getTotalShippedOrders").status_code == 403


class TestCancelOrder:
    def test_cancel_twice_is_idempotent(self, client, alice):
        place(client, "X1")

        first = client.delete("/orders/X1")
        assert first.status_code == 200
        assert first.json() == {"message": "Order cancelled successfully"}

        second = client.delete("/orders/X1")
        assert second.status_code == 200

        assert client.get("/orders").json() == []

    def test_cannot_cancel_other_users_order(self, client, register, login):
        register("alice", "pw1")
        register("bob", "pw2")
        login("alice", "pw1")
        place(client, "X1")

        login("bob", "pw2")
        response = client.delete("/orders/X1")
        assert response.status_code == 403

        login("alice", "pw1")
        assert len(client.get("/orders").json()) == 1

    def test_admin_can_cancel(self, client, alice, login_admin):
        place(client, "X1")
        login_admin()
        assert client.delete("/orders/X1").status_code == 200
        assert client.get("/admin/orders").json() == []

    def test_requires_session(self, client):
        assert client.delete("/orders/X1").status_code == 401
