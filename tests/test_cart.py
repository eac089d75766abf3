"""Tests for the per-user cart."""

PIZZA = {"id": "pizza-42", "name": "Pizza Margherita", "price": 14.99, "image": "pizza.png"}
SALAD = {"id": "salad-7", "name": "Caesar Salad", "price": 8.99}


class TestAddItem:
    def test_requires_session(self, client):
        response = client.post("/cart", json=PIZZA)
        assert response.status_code == 401

    def test_add_attaches_owner(self, client, alice):
        response = client.post("/cart", json=PIZZA)
        assert response.status_code == 201
        item = response.json()
        assert item["productId"] == "pizza-42"
        assert item["name"] == "Pizza Margherita"
        assert item["price"] == 14.99
        assert item["image"] == "pizza.png"
        assert item["ownerId"] == alice
        assert isinstance(item["id"], int)

    def test_numeric_product_id_accepted(self, client, alice):
        response = client.post("/cart", json={"id": 7, "name": "Cola", "price": 2.5})
        assert response.status_code == 201
        assert response.json()["productId"] == "7"

    def test_same_product_twice_makes_two_lines(self, client, alice):
        client.post("/cart", json=PIZZA)
        client.post("/cart", json=PIZZA)
        assert len(client.get("/mycart").json()) == 2

    def test_admin_has_no_cart(self, client, login_admin):
        login_admin()
        assert client.get("/mycart").status_code == 403

    def test_missing_price(self, client, alice):
        response = client.post("/cart", json={"id": "x", "name": "Mystery"})
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    def test_nan_price_rejected(self, client, alice):
        response = client.post(
            "/cart",
            content='{"id": "x", "name": "Mystery", "price": NaN}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"


class TestListAndRemove:
    def test_list_in_insertion_order(self, client, alice):
        client.post("/cart", json=PIZZA)
        client.post("/cart", json=SALAD)
        names = [i["name"] for i in client.get("/mycart").json()]
        assert names == ["Pizza Margherita", "Caesar Salad"]

    def test_remove_item(self, client, alice):
        item_id = client.post("/cart", json=PIZZA).json()["id"]
        client.post("/cart", json=SALAD)

        response = client.post("/deleteitem", json={"itemId": item_id})
        assert response.status_code == 200
        assert response.json() == {"message": "OK"}
        assert [i["name"] for i in client.get("/mycart").json()] == ["Caesar Salad"]

    def test_remove_missing_item_succeeds(self, client, alice):
        response = client.post("/deleteitem", json={"itemId": 12345})
        assert response.status_code == 200

    def test_carts_are_private(self, client, register, login):
        register("alice", "pw1")
        register("bob", "pw2")

        login("alice", "pw1")
        alice_item = client.post("/cart", json=PIZZA).json()["id"]

        login("bob", "pw2")
        assert client.get("/mycart").json() == []
        # Bob cannot delete Alice's line
        client.post("/deleteitem", json={"itemId": alice_item})

        login("alice", "pw1")
        assert [i["id"] for i in client.get("/mycart").json()] == [alice_item]


class TestClearCart:
    def test_clear_only_own_cart(self, client, register, login):
        register("alice", "pw1")
        register("bob", "pw2")

        login("bob", "pw2")
        client.post("/cart", json=SALAD)

        login("alice", "pw1")
        client.post("/cart", json=PIZZA)
        client.post("/cart", json=SALAD)

        response = client.delete("/deleteCart")
        assert response.status_code == 200
        assert response.json() == {"message": "Cart cleared", "deletedCount": 2}
        assert client.get("/mycart").json() == []

        login("bob", "pw2")
        assert len(client.get("/mycart").json()) == 1

    def test_clear_empty_cart(self, client, alice):
        response = client.delete("/deleteCart")
        assert response.status_code == 200
        assert response.json()["deletedCount"] == 0
