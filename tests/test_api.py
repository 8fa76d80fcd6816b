# tests/test_api.py
from decimal import Decimal

ADDRESS = "221B Baker Street, London NW1 6XE"


def _register(client, email="alice@example.com"):
    r = client.post("/auth/register", json={"name": "Alice", "email": email, "password": "wonderland1"})
    assert r.status_code == 201
    return r.json()


def _product(client, name="Pen", cost="100"):
    r = client.post("/seller/register", json={"name": name, "cost": cost, "category": "stationery"})
    assert r.status_code == 201
    return r.json()["id"]


def test_register_and_login(client):
    user = _register(client)
    assert "password" not in user
    assert Decimal(user["wallet_money"]) == Decimal("500")

    assert client.post("/auth/register", json={"name": "A", "email": "alice@example.com", "password": "wonderland1"}).status_code == 400
    assert client.post("/auth/register", json={"name": "A", "email": "bob@example.com", "password": "nodigits"}).status_code == 422

    assert client.post("/auth/login", json={"email": "alice@example.com", "password": "wonderland1"}).json()["id"] == user["id"]
    assert client.post("/auth/login", json={"email": "alice@example.com", "password": "wrongpass1"}).status_code == 401


def test_user_address(client):
    user = _register(client)
    r = client.get(f"/users/{user['id']}", params={"q": "address"})
    assert r.json() == {"address": "ADDRESS_NOT_SET"}

    assert client.put(f"/users/{user['id']}", json={"address": "too short"}).status_code == 422
    r = client.put(f"/users/{user['id']}", json={"address": ADDRESS})
    assert r.status_code == 200
    assert r.json() == {"address": ADDRESS}
    assert client.get(f"/users/{user['id']}").json()["address"] == ADDRESS

    assert client.get("/users/missing").status_code == 404


def test_products(client):
    pid = _product(client)
    _product(client, name="Lamp", cost="20")
    assert client.get(f"/products/{pid}").json()["name"] == "Pen"
    assert client.get("/products/missing").status_code == 404
    assert len(client.get("/products").json()) == 2
    assert client.get("/products", params={"category": "lighting"}).json() == []


def test_cart_flow_and_checkout(client):
    user = _register(client)
    email = user["email"]
    pen = _product(client, cost="100")
    ink = _product(client, name="Ink", cost="5")

    assert client.get(f"/cart/{email}").status_code == 404

    r = client.post("/cart/add", json={"user_email": email, "product_id": pen, "quantity": 1})
    assert r.status_code == 200
    client.post("/cart/add", json={"user_email": email, "product_id": ink, "quantity": 1})

    # duplicate and unknown products are bad requests
    assert client.post("/cart/add", json={"user_email": email, "product_id": pen, "quantity": 1}).status_code == 400
    assert client.post("/cart/add", json={"user_email": email, "product_id": "nope", "quantity": 1}).status_code == 400

    r = client.put("/cart/update", json={"user_email": email, "product_id": pen, "quantity": 3})
    assert [(i["product"]["id"], i["quantity"]) for i in r.json()["cart_items"]] == [(pen, 3), (ink, 1)]

    # quantity 0 removes the line item
    r = client.put("/cart/update", json={"user_email": email, "product_id": ink, "quantity": 0})
    assert r.status_code == 204
    assert len(client.get(f"/cart/{email}").json()["cart_items"]) == 1

    # no address yet
    r = client.post("/cart/checkout", params={"user_email": email})
    assert r.status_code == 400
    assert r.json() == {"detail": "No valid address"}

    client.put(f"/users/{user['id']}", json={"address": ADDRESS})
    r = client.post("/cart/checkout", params={"user_email": email})
    assert r.status_code == 200
    assert r.json()["cart_items"] == []

    wallet = client.post("/auth/login", json={"email": email, "password": "wonderland1"}).json()["wallet_money"]
    assert Decimal(wallet) == Decimal("200")

    r = client.post("/cart/checkout", params={"user_email": email})
    assert r.status_code == 400
    assert r.json() == {"detail": "No products in cart"}


def test_cart_remove(client):
    email = _register(client)["email"]
    pen = _product(client)

    assert client.post("/cart/remove", json={"user_email": email, "product_id": pen}).status_code == 400
    client.post("/cart/add", json={"user_email": email, "product_id": pen, "quantity": 2})
    assert client.post("/cart/remove", json={"user_email": email, "product_id": pen}).status_code == 204
    assert client.get(f"/cart/{email}").json()["cart_items"] == []


def test_unknown_user_and_missing_cart(client):
    assert client.get("/cart/ghost@example.com").status_code == 404
    assert client.post("/cart/checkout", params={"user_email": "ghost@example.com"}).status_code == 404

    email = _register(client)["email"]
    r = client.post("/cart/checkout", params={"user_email": email})
    assert r.status_code == 404
    assert r.json() == {"detail": "Cart not found"}
    assert client.put("/cart/update", json={"user_email": email, "product_id": "x", "quantity": 1}).status_code == 400
