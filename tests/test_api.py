"""
End-to-end tests over the HTTP surface (FastAPI TestClient).

Tests cover:
- signup / login / protected routes and the error body shape
- the add -> merge -> remove -> convert -> empty cart scenario
- status codes for each error kind
- item endpoints, health and the root index
"""

from decimal import Decimal

from conftest import COFFEE_ID, HEADPHONES_ID, signup_and_login


def _error(resp, status: int, kind: str):
    assert resp.status_code == status, resp.text
    body = resp.json()
    assert set(body) == {"error", "message"}
    assert body["error"] == kind
    return body


class TestAuth:
    def test_signup_returns_user_id(self, client):
        resp = client.post("/users", json={"username": "alice", "password": "secret1"})

        assert resp.status_code == 201
        assert resp.json()["message"] == "User created successfully"
        assert isinstance(resp.json()["user_id"], int)

    def test_duplicate_signup_conflict(self, client):
        client.post("/users", json={"username": "alice", "password": "secret1"})
        resp = client.post("/users", json={"username": "alice", "password": "other"})

        _error(resp, 409, "conflict")

    def test_signup_missing_field(self, client):
        resp = client.post("/users", json={"username": "alice"})

        body = _error(resp, 400, "invalid_argument")
        assert "password" in body["message"]

    def test_login_wrong_password(self, client):
        client.post("/users", json={"username": "alice", "password": "secret1"})
        resp = client.post("/users/login", json={"username": "alice", "password": "nope"})

        body = _error(resp, 401, "unauthenticated")
        assert body["message"] == "Invalid username or password"

    def test_login_unknown_user_same_message(self, client):
        resp = client.post("/users/login", json={"username": "ghost", "password": "x"})

        body = _error(resp, 401, "unauthenticated")
        assert body["message"] == "Invalid username or password"

    def test_protected_route_without_token(self, client):
        _error(client.get("/carts"), 401, "unauthenticated")

    def test_protected_route_with_garbage_token(self, client):
        resp = client.get("/carts", headers={"Authorization": "Bearer not-a-jwt"})

        _error(resp, 401, "unauthenticated")

    def test_token_from_other_secret_rejected(self, client):
        import jwt

        forged = jwt.encode({"sub": "1", "user_id": 1, "iat": 0, "exp": 4102444800}, "other-secret", algorithm="HS256")
        resp = client.get("/carts", headers={"Authorization": f"Bearer {forged}"})

        _error(resp, 401, "unauthenticated")

    def test_relogin_revokes_previous_token(self, client):
        old = signup_and_login(client, "alice", "secret1")
        resp = client.post("/users/login", json={"username": "alice", "password": "secret1"})
        new = {"Authorization": f"Bearer {resp.json()['token']}"}

        _error(client.get("/users", headers=old), 401, "unauthenticated")
        assert client.get("/users", headers=new).status_code == 200

    def test_list_users_hides_credentials(self, client):
        headers = signup_and_login(client, "alice", "secret1")
        signup_and_login(client, "bob", "secret2")
        #bob sie zalogowal, alice dalej ma swoj token
        resp = client.get("/users", headers=headers)

        assert resp.status_code == 200
        users = resp.json()["users"]
        assert [u["username"] for u in users] == ["alice", "bob"]
        for u in users:
            assert set(u) == {"id", "username", "created_at"}


class TestCartFlow:
    def test_full_scenario(self, client):
        headers = signup_and_login(client, "alice", "secret1")

        resp = client.post("/carts/items", json={"item_id": COFFEE_ID, "quantity": 2}, headers=headers)
        assert resp.status_code == 200
        assert resp.json() == {"message": "Item added to cart successfully"}

        client.post("/carts/items", json={"item_id": COFFEE_ID, "quantity": 1}, headers=headers)
        client.post("/carts/items", json={"item_id": HEADPHONES_ID, "quantity": 1}, headers=headers)

        cart = client.get("/carts", headers=headers).json()["cart"]
        lines = {line["item_id"]: line for line in cart["items"]}
        assert lines[COFFEE_ID]["quantity"] == 3
        assert lines[COFFEE_ID]["item"]["name"] == "Organic Coffee Beans"
        assert Decimal(str(cart["total"])) == Decimal("374.96")

        resp = client.delete(f"/carts/items/{HEADPHONES_ID}", headers=headers)
        assert resp.json() == {"message": "Item removed from cart successfully"}

        resp = client.post("/orders", headers=headers)
        assert resp.status_code == 201
        order = resp.json()
        assert order["message"] == "Order created successfully"
        assert Decimal(str(order["total"])) == Decimal("74.97")

        cart = client.get("/carts", headers=headers).json()["cart"]
        assert cart["items"] == []
        assert cart["status"] == "emptied"

        orders = client.get("/orders", headers=headers).json()["orders"]
        assert [o["id"] for o in orders] == [order["order_id"]]
        assert orders[0]["status"] == "pending"

    def test_get_cart_before_any_add(self, client):
        headers = signup_and_login(client, "alice", "secret1")

        _error(client.get("/carts", headers=headers), 404, "not_found")

    def test_zero_quantity_rejected(self, client):
        headers = signup_and_login(client, "alice", "secret1")
        resp = client.post("/carts/items", json={"item_id": COFFEE_ID, "quantity": 0}, headers=headers)

        body = _error(resp, 400, "invalid_argument")
        assert "quantity" in body["message"]

    def test_oversized_quantity_rejected(self, client):
        headers = signup_and_login(client, "alice", "secret1")
        resp = client.post("/carts/items", json={"item_id": COFFEE_ID, "quantity": 10**20}, headers=headers)

        body = _error(resp, 400, "invalid_argument")
        assert "quantity" in body["message"]
        _error(client.get("/carts", headers=headers), 404, "not_found")

    def test_unknown_item_not_found(self, client):
        headers = signup_and_login(client, "alice", "secret1")
        resp = client.post("/carts/items", json={"item_id": 999, "quantity": 1}, headers=headers)

        body = _error(resp, 404, "not_found")
        assert body["message"] == "Item not found"
        #nieudane dodanie nie tworzy koszyka
        _error(client.get("/carts", headers=headers), 404, "not_found")

    def test_remove_missing_line_is_ok(self, client):
        headers = signup_and_login(client, "alice", "secret1")
        client.post("/carts/items", json={"item_id": COFFEE_ID, "quantity": 1}, headers=headers)

        resp = client.delete(f"/carts/items/{HEADPHONES_ID}", headers=headers)

        assert resp.status_code == 200

    def test_order_from_empty_cart(self, client):
        headers = signup_and_login(client, "alice", "secret1")
        client.post("/carts/items", json={"item_id": COFFEE_ID, "quantity": 1}, headers=headers)
        client.delete(f"/carts/items/{COFFEE_ID}", headers=headers)

        _error(client.post("/orders", headers=headers), 422, "invalid_state")

    def test_order_without_cart(self, client):
        headers = signup_and_login(client, "alice", "secret1")

        _error(client.post("/orders", headers=headers), 404, "not_found")

    def test_carts_are_isolated_per_user(self, client):
        alice = signup_and_login(client, "alice", "secret1")
        bob = signup_and_login(client, "bob", "secret2")
        client.post("/carts/items", json={"item_id": COFFEE_ID, "quantity": 1}, headers=alice)
        client.post("/carts/items", json={"item_id": HEADPHONES_ID, "quantity": 5}, headers=bob)

        alice_cart = client.get("/carts", headers=alice).json()["cart"]
        assert [line["item_id"] for line in alice_cart["items"]] == [COFFEE_ID]

        carts = client.get("/carts/all", headers=alice).json()["carts"]
        assert sorted(c["user"]["username"] for c in carts) == ["alice", "bob"]

    def test_list_all_orders(self, client):
        alice = signup_and_login(client, "alice", "secret1")
        bob = signup_and_login(client, "bob", "secret2")
        for headers in (alice, bob):
            client.post("/carts/items", json={"item_id": COFFEE_ID, "quantity": 1}, headers=headers)
            client.post("/orders", headers=headers)

        orders = client.get("/orders/all", headers=bob).json()["orders"]

        assert [o["user"]["username"] for o in orders] == ["alice", "bob"]
        assert len(client.get("/orders", headers=bob).json()["orders"]) == 1


class TestItems:
    def test_list_items_is_public(self, client):
        resp = client.get("/items")

        assert resp.status_code == 200
        assert len(resp.json()["items"]) == 5

    def test_get_item(self, client):
        resp = client.get(f"/items/{HEADPHONES_ID}")

        assert resp.json()["name"] == "Premium Wireless Headphones"
        assert Decimal(str(resp.json()["price"])) == Decimal("299.99")

    def test_get_unknown_item(self, client):
        _error(client.get("/items/999"), 404, "not_found")

    def test_create_requires_auth(self, client):
        resp = client.post("/items", json={"name": "Lamp", "price": "10.00"})

        _error(resp, 401, "unauthenticated")

    def test_create_and_delete_item(self, client):
        headers = signup_and_login(client, "alice", "secret1")

        resp = client.post("/items", json={"name": "Lamp", "price": "10.00"}, headers=headers)
        assert resp.status_code == 201
        item_id = resp.json()["item"]["id"]

        resp = client.delete(f"/items/{item_id}", headers=headers)
        assert resp.json() == {"message": "Item deleted successfully"}
        _error(client.get(f"/items/{item_id}"), 404, "not_found")

    def test_negative_price_rejected(self, client):
        headers = signup_and_login(client, "alice", "secret1")
        resp = client.post("/items", json={"name": "Lamp", "price": "-1"}, headers=headers)

        _error(resp, 400, "invalid_argument")


class TestServiceEndpoints:
    def test_health(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy", "service": "shopcart", "database": "healthy"}

    def test_root_lists_endpoints(self, client):
        body = client.get("/").json()

        assert body["status"] == "active"
        assert "POST /orders" in body["endpoints"]["orders"]

    def test_response_time_header(self, client):
        resp = client.get("/items")

        assert "x-response-time-ms" in resp.headers
