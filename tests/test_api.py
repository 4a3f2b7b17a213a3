import pytest
from fastapi.testclient import TestClient

from main import create_app
from storage.memory import MemStorage
from utils.hashing import verify_password

ADDRESS = {
    "full_name": "Jane Doe",
    "street_address": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "US",
    "phone_number": "555-0100",
}


def create_product(client, **overrides):
    body = {"name": "Canvas Tote", "price": 20.0, "category": "Accessories", "stock": 10}
    body.update(overrides)
    resp = client.post("/api/products", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_root(client):
    assert client.get("/").json() == {"message": "Storefront API is running"}


# ---- products ----

def test_product_crud(client):
    product = create_product(client, description="Sturdy")
    assert product["id"] == 1
    assert product["rating"] == 0
    assert product["review_count"] == 0

    fetched = client.get(f"/api/products/{product['id']}").json()
    assert fetched == product

    resp = client.put(f"/api/products/{product['id']}", json={"price": 15.0})
    assert resp.status_code == 200
    assert resp.json()["price"] == 15.0
    assert resp.json()["description"] == "Sturdy"

    assert client.delete(f"/api/products/{product['id']}").json() == {"success": True}
    resp = client.get(f"/api/products/{product['id']}")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Product not found"}


def test_product_not_found_paths(client):
    assert client.put("/api/products/42", json={"price": 1.0}).status_code == 404
    assert client.delete("/api/products/42").status_code == 404


def test_null_for_required_product_field_is_400(backend_client):
    product = create_product(backend_client, name="Tote")

    for field in ("name", "price", "category", "stock", "featured"):
        resp = backend_client.put(f"/api/products/{product['id']}", json={field: None})
        assert resp.status_code == 400, field
        assert field in resp.json()["error"]

    # Nullable fields may still be cleared
    resp = backend_client.put(f"/api/products/{product['id']}", json={"description": None})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Tote"

    search = backend_client.get("/api/products", params={"q": "to"})
    assert search.status_code == 200
    assert [p["name"] for p in search.json()] == ["Tote"]


def test_invalid_product_is_400(client):
    resp = client.post("/api/products", json={"name": "Broken", "price": -1, "category": "X"})

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid request data"
    assert "price" in body["error"]


def test_product_list_filters_and_sort(client):
    create_product(client, name="Cheap", price=5.0, category="Footwear")
    create_product(client, name="Pricey", price=500.0, featured=True)
    create_product(client, name="Middle", price=50.0, category="Footwear", is_on_sale=True)

    names = lambda resp: [p["name"] for p in resp.json()]
    assert names(client.get("/api/products")) == ["Cheap", "Pricey", "Middle"]
    assert names(client.get("/api/products", params={"sort": "price-high"})) == ["Pricey", "Middle", "Cheap"]
    assert names(client.get("/api/products", params={"category": "Footwear", "max_price": 10})) == ["Cheap"]
    assert names(client.get("/api/products", params={"filter": "featured"})) == ["Pricey"]
    assert names(client.get("/api/products", params={"filter": "sale"})) == ["Middle"]
    assert client.get("/api/products", params={"sort": "bogus"}).status_code == 400


# ---- categories ----

def test_categories(client):
    resp = client.post("/api/categories", json={"name": "Hats"})
    assert resp.status_code == 201
    category = resp.json()

    assert client.get(f"/api/categories/{category['id']}").json()["name"] == "Hats"
    assert [c["name"] for c in client.get("/api/categories").json()] == ["Hats"]

    dup = client.post("/api/categories", json={"name": "Hats"})
    assert dup.status_code == 400
    assert dup.json()["message"] == "Category already exists"
    assert client.get("/api/categories/99").status_code == 404


# ---- users ----

def test_users(client, mem_storage):
    resp = client.post("/api/users", json={
        "email": "Ann@Example.com", "password": "s3cret", "display_name": "Ann", "firebase_id": "fb-9",
    })
    assert resp.status_code == 201
    user = resp.json()
    assert user["email"] == "ann@example.com"
    assert user["role"] == "customer"
    assert "password" not in user and "password_hash" not in user

    stored = mem_storage.get_user(user["id"])
    assert stored.password_hash != "s3cret"
    assert verify_password("s3cret", stored.password_hash)

    assert client.get(f"/api/users/{user['id']}").json()["id"] == user["id"]
    assert client.get("/api/users/firebase/fb-9").json()["id"] == user["id"]
    assert len(client.get("/api/users").json()) == 1
    assert client.get("/api/users/77").status_code == 404
    assert client.post("/api/users", json={"email": "ann@example.com"}).status_code == 400
    assert client.post("/api/users", json={"email": "not-an-email"}).status_code == 400


def test_duplicate_firebase_id_is_400(backend_client):
    first = backend_client.post("/api/users", json={"email": "a@example.com", "firebase_id": "fb-1"})
    assert first.status_code == 201

    dup = backend_client.post("/api/users", json={"email": "b@example.com", "firebase_id": "fb-1"})
    assert dup.status_code == 400
    assert dup.json() == {"message": "Firebase account already registered"}

    # Users without a firebase id never collide
    assert backend_client.post("/api/users", json={"email": "c@example.com"}).status_code == 201
    assert backend_client.post("/api/users", json={"email": "d@example.com"}).status_code == 201
    assert len(backend_client.get("/api/users").json()) == 3


# ---- orders ----

def place_order(client, items, user_id=1):
    return client.post("/api/orders", json={"user_id": user_id, "shipping_address": ADDRESS, "cart_items": items})


def test_create_order_totals_items_and_stock(client):
    tote = create_product(client, price=20.0, stock=10)
    mug = create_product(client, name="Mug", price=5.0, stock=1)

    resp = place_order(client, [
        {"product_id": tote["id"], "quantity": 2, "price": 20.0},
        {"product_id": mug["id"], "quantity": 3, "price": 5.0},
    ])
    assert resp.status_code == 201, resp.text
    order = resp.json()
    assert order["status"] == "pending"
    # (40 + 15) * 1.08
    assert order["total"] == pytest.approx(59.4)

    assert client.get(f"/api/products/{tote['id']}").json()["stock"] == 8
    assert client.get(f"/api/products/{mug['id']}").json()["stock"] == 0

    detail = client.get(f"/api/orders/{order['id']}").json()
    assert [(i["product_id"], i["quantity"], i["price"]) for i in detail["items"]] == [
        (tote["id"], 2, 20.0), (mug["id"], 3, 5.0),
    ]
    assert detail["next_statuses"] == ["processing", "cancelled"]
    assert detail["shipping_address"] == ADDRESS


def test_order_with_unknown_product_still_recorded(client):
    resp = place_order(client, [{"product_id": 404, "quantity": 1, "price": 10.0}])

    assert resp.status_code == 201
    assert len(client.get(f"/api/orders/{resp.json()['id']}").json()["items"]) == 1


def test_invalid_orders_are_400(client):
    assert place_order(client, []).status_code == 400
    assert place_order(client, [{"product_id": 1, "quantity": 0, "price": 1.0}]).status_code == 400

    bad_address = dict(ADDRESS, city="")
    resp = client.post("/api/orders", json={
        "user_id": 1, "shipping_address": bad_address,
        "cart_items": [{"product_id": 1, "quantity": 1, "price": 1.0}],
    })
    assert resp.status_code == 400
    assert "shipping_address.city" in resp.json()["error"]


def test_order_listing_and_status_updates(client):
    first = place_order(client, [{"product_id": 1, "quantity": 1, "price": 1.0}], user_id=5).json()
    place_order(client, [{"product_id": 1, "quantity": 1, "price": 1.0}], user_id=6)

    assert len(client.get("/api/orders").json()) == 2
    assert [o["id"] for o in client.get("/api/users/5/orders").json()] == [first["id"]]

    resp = client.put(f"/api/orders/{first['id']}/status", json={"status": "shipped"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "shipped"
    assert [o["id"] for o in client.get("/api/orders", params={"status": "shipped"}).json()] == [first["id"]]
    assert client.get(f"/api/orders/{first['id']}").json()["next_statuses"] == ["delivered"]

    assert client.put(f"/api/orders/{first['id']}/status", json={"status": "lost"}).status_code == 400
    assert client.put("/api/orders/99/status", json={"status": "shipped"}).status_code == 404
    assert client.get("/api/orders/99").status_code == 404


class ExplodingStorage(MemStorage):
    def create_order_item(self, item):
        raise RuntimeError("disk full")

    def get_all_products(self):
        raise RuntimeError("backend unavailable")


def test_storage_failures_are_500():
    app = create_app(storage=ExplodingStorage())
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = place_order(c, [{"product_id": 1, "quantity": 1, "price": 1.0}])
        assert resp.status_code == 500
        assert resp.json()["message"] == "Failed to create order: disk full"

        resp = c.get("/api/products")
        assert resp.status_code == 500
        assert resp.json() == {"message": "Internal server error", "error": "backend unavailable"}


# ---- cart & admin ----

def test_cart_summary_coalesces_duplicates(client):
    resp = client.post("/api/cart/summary", json={"items": [
        {"product_id": 1, "name": "Tote", "price": 10.0, "quantity": 2},
        {"product_id": 1, "name": "Tote", "price": 10.0, "quantity": 3},
        {"product_id": 2, "name": "Mug", "price": 2.5},
    ]})
    assert resp.status_code == 200
    body = resp.json()
    assert [(i["product_id"], i["quantity"]) for i in body["items"]] == [(1, 5), (2, 1)]
    assert body["total_items"] == 6
    assert body["subtotal"] == 52.5
    assert body["tax"] == 4.2
    assert body["shipping"] == 0.0
    assert body["total"] == 56.7


def test_admin_stats(client):
    create_product(client, stock=3)
    create_product(client, name="Plenty", stock=50)
    client.post("/api/users", json={"email": "a@example.com"})
    place_order(client, [{"product_id": 2, "quantity": 1, "price": 10.0}])
    second = place_order(client, [{"product_id": 2, "quantity": 1, "price": 10.0}]).json()
    client.put(f"/api/orders/{second['id']}/status", json={"status": "processing"})

    stats = client.get("/api/admin/stats").json()
    assert stats == {
        "total_revenue": 21.6,
        "total_orders": 2,
        "pending_orders": 1,
        "total_products": 2,
        "low_stock_products": 1,
        "total_users": 1,
    }
