import pytest
from bson import ObjectId

from ordermgmt.app import build_app, create_app, main
from ordermgmt.config import Database
from ordermgmt.domain import Cart, CartItem, CartItemRequest, Customer, Order, Product

CUSTOMER_ID = "64f1a2b3c4d5e6f7a8b9c0d1"
PRODUCT_ID = "64f1a2b3c4d5e6f7a8b9c0d2"


class Recorder:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def __getattr__(self, name):
        def call(*args):
            self.calls.append((name, *args))
            return self.result

        return call


@pytest.fixture(autouse=True)
def in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def usecases():
    return {
        "customer": Recorder([Customer(id=ObjectId(CUSTOMER_ID), name="John Doe")]),
        "product": Recorder(Product(id=ObjectId(PRODUCT_ID), name="Pen", price=1.5, stock=3)),
        "order": Recorder(Order(customer_id="c1")),
        "cart": Recorder(Cart(customer_id="c1", items=[CartItem(product_id="p1", quantity=2)])),
    }


@pytest.fixture
def client(usecases):
    app = create_app(
        usecases["customer"], usecases["product"], usecases["order"], usecases["cart"]
    )
    return app.test_client()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "message": "API is running"}


def test_list_customers(client, usecases):
    resp = client.get("/api/customers/")
    assert resp.status_code == 200
    assert resp.get_json()[0]["name"] == "John Doe"
    assert usecases["customer"].calls == [("get_all",)]


def test_missing_trailing_slash_redirects(client):
    resp = client.get("/api/customers")
    assert 300 <= resp.status_code < 400
    assert resp.headers["Location"].endswith("/api/customers/")


def test_product_by_id_routes_id(client, usecases):
    resp = client.get(f"/api/products/{PRODUCT_ID}")
    assert resp.status_code == 200
    assert resp.get_json()["id"] == PRODUCT_ID
    assert usecases["product"].calls == [("get_by_id", PRODUCT_ID)]


def test_create_order(client, usecases):
    resp = client.post("/api/orders/", json={"customer_id": "c1"})
    assert resp.status_code == 201
    assert resp.get_json()["customer_id"] == "c1"
    assert usecases["order"].calls[0][0] == "create"


def test_get_cart_routes_customer(client, usecases):
    resp = client.get("/api/customers/c1/cart")
    assert resp.status_code == 200
    assert resp.get_json()["items"][0]["product_id"] == "p1"
    assert usecases["cart"].calls == [("get_cart_by_customer_id", "c1")]


def test_add_and_update_cart_item(client, usecases):
    payload = {"product_id": "p1", "product_name": "Pen", "quantity": 2}
    assert client.post("/api/customers/c1/cart/item", json=payload).status_code == 200
    assert client.put("/api/customers/c1/cart/item", json=payload).status_code == 200
    expected = CartItemRequest(product_id="p1", product_name="Pen", quantity=2)
    assert usecases["cart"].calls == [
        ("add_to_cart", "c1", expected),
        ("update_cart_item", "c1", expected),
    ]


def test_remove_cart_item(client, usecases):
    resp = client.delete("/api/customers/c1/cart/item/p1")
    assert resp.status_code == 200
    assert usecases["cart"].calls == [("remove_cart_item", "c1", "p1")]


def test_clear_cart(client, usecases):
    resp = client.delete("/api/customers/c1/cart")
    assert resp.get_json() == {"message": "Cart cleared successfully"}
    assert usecases["cart"].calls == [("clear_cart", "c1")]


def test_unknown_route(client):
    assert client.get("/api/unknown").status_code == 404


class InsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeCollection:
    def __init__(self, docs=None):
        self.docs = list(docs or [])

    def find(self, query):
        return list(self.docs)

    def find_one(self, query):
        return next(
            (d for d in self.docs if all(d.get(k) == v for k, v in query.items())), None
        )

    def insert_one(self, doc):
        stored = dict(doc, _id=ObjectId())
        self.docs.append(stored)
        return InsertResult(stored["_id"])


@pytest.fixture
def built_client():
    db = {
        "customers": FakeCollection(),
        "products": FakeCollection(
            [{"_id": ObjectId(PRODUCT_ID), "name": "Pen", "price": 1.5, "stock": 3}]
        ),
        "orders": FakeCollection(),
        "carts": FakeCollection(),
    }
    return build_app(Database(client=None, db=db)).test_client()


def test_build_app_lists_stored_products(built_client):
    resp = built_client.get("/api/products/")
    assert resp.status_code == 200
    assert resp.get_json() == [{"id": PRODUCT_ID, "name": "Pen", "price": 1.5, "stock": 3}]


def test_build_app_no_customers(built_client):
    resp = built_client.get("/api/customers/")
    assert (resp.status_code, resp.get_json()) == (404, {"message": "No customers found"})


def test_build_app_missing_cart_is_error(built_client):
    resp = built_client.get("/api/customers/c1/cart")
    assert resp.status_code == 500
    assert "error" in resp.get_json()


def test_build_app_add_to_cart_prices_item(built_client):
    payload = {"product_id": PRODUCT_ID, "product_name": "Pen", "quantity": 2}
    resp = built_client.post("/api/customers/c1/cart/item", json=payload)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["customer_id"] == "c1"
    assert body["total_items"] == 2
    assert body["items"][0]["product_price"] == 1.5


def test_main_requires_env_file():
    with pytest.raises(RuntimeError, match="Error loading .env file"):
        main([])


def test_main_reports_connection_failure(tmp_path, monkeypatch):
    monkeypatch.delenv("MONGODB_URI", raising=False)
    (tmp_path / ".env").write_text("")
    with pytest.raises(RuntimeError, match="Failed to connect to database"):
        main([])