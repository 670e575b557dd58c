# tests/test_api.py
from decimal import Decimal

from fastapi.testclient import TestClient

from pharmapos.database import Workspace, reset_workspace
from pharmapos.main import app
from pharmapos.seed import load_products

client = TestClient(app)

PRODUCTS = [
    {"id": "p1", "sku": "SKU-P1", "name": "Ibuprofen 200mg", "price": "10.00", "stock": 5,
     "reorder_point": 2, "requires_prescription": False, "category": "OTC"},
    {"id": "p2", "sku": "SKU-P2", "name": "Amoxicillin 500mg", "price": "18.50", "stock": 2,
     "reorder_point": 1, "requires_prescription": True, "category": "Prescription"},
]


def reset():
    reset_workspace(Workspace(load_products(PRODUCTS)))


def test_reset_endpoint_reseeds_default_catalog():
    r = client.post("/reset")
    assert r.status_code == 200
    assert r.json()["status"] == "reset"
    assert len(client.get("/products").json()) == r.json()["products"]


def test_list_and_filter_products():
    reset()
    assert [p["id"] for p in client.get("/products").json()] == ["p1", "p2"]
    r = client.get("/products", params={"category": "Prescription"})
    assert [p["id"] for p in r.json()] == ["p2"]
    r = client.get("/products", params={"search": "ibu"})
    assert [p["id"] for p in r.json()] == ["p1"]
    assert client.get("/products/zzz").status_code == 404


def test_sale_flow():
    reset()
    r = client.post("/cart/add", json={"product_id": "p1", "quantity": 3})
    assert r.status_code == 200
    cart = r.json()
    assert cart["lines"][0]["item"]["quantity"] == 3
    assert Decimal(cart["totals"]["total"]) == Decimal("32.10")

    r = client.post("/cart/checkout", json={"customer_name": "Jane Doe", "payment_method": "Cash"})
    assert r.status_code == 200
    sale = r.json()
    assert Decimal(sale["subtotal"]) == Decimal("30.00")
    assert Decimal(sale["tax"]) == Decimal("2.10")
    assert Decimal(sale["total"]) == Decimal("32.10")
    assert sale["items"][0]["product_name"] == "Ibuprofen 200mg"

    assert client.get("/products/p1").json()["stock"] == 2
    assert client.get("/cart").json()["lines"] == []
    sales = client.get("/sales").json()
    assert [s["id"] for s in sales] == [sale["id"]]
    note = client.get("/notification").json()
    assert note["kind"] == "success"
    assert sale["id"] in note["message"]


def test_add_over_stock_is_409():
    reset()
    r = client.post("/cart/add", json={"product_id": "p1", "quantity": 10})
    assert r.status_code == 409
    body = r.json()
    assert body["error"] == "insufficient_stock"
    assert body["detail"] == "Only 5 units available for Ibuprofen 200mg."
    assert client.get("/cart").json()["lines"] == []


def test_add_zero_is_400():
    reset()
    r = client.post("/cart/add", json={"product_id": "p1", "quantity": 0})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_quantity"


def test_prescription_required_is_422_and_atomic():
    reset()
    client.post("/cart/add", json={"product_id": "p2", "quantity": 1})
    r = client.post("/cart/checkout", json={"customer_name": "A B", "payment_method": "Card"})
    assert r.status_code == 422
    assert r.json()["error"] == "prescription_required"
    assert client.get("/products/p2").json()["stock"] == 2
    assert client.get("/sales").json() == []
    assert len(client.get("/cart").json()["lines"]) == 1


def test_short_customer_name_is_400():
    reset()
    client.post("/cart/add", json={"product_id": "p1", "quantity": 1})
    r = client.post("/cart/checkout", json={"customer_name": " J", "payment_method": "Cash"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_customer"


def test_update_and_remove():
    reset()
    client.post("/cart/add", json={"product_id": "p1", "quantity": 1})
    r = client.post("/cart/update", json={"product_id": "p1", "quantity": 99})
    assert r.json()["lines"][0]["item"]["quantity"] == 5
    assert client.get("/notification").json()["message"] == "Cannot exceed stock level of 5."

    r = client.post("/cart/remove", json={"product_id": "p1"})
    assert r.json()["lines"] == []
    r = client.post("/cart/remove", json={"product_id": "p1"})
    assert r.status_code == 200


def test_restock_and_stats():
    reset()
    r = client.post("/inventory/restock", json={"product_id": "p1", "quantity": 20})
    assert r.status_code == 200
    assert r.json()["stock"] == 25

    r = client.post("/inventory/restock", json={"product_id": "p1", "quantity": 0})
    assert r.status_code == 400

    r = client.post("/inventory/restock", json={"product_id": "zzz", "quantity": 3})
    assert r.status_code == 200
    assert r.json() is None

    stats = client.get("/stats").json()
    assert stats["products_tracked"] == 2
    assert Decimal(stats["inventory_value"]) == Decimal("287.00")


def test_recent_sales_limit():
    reset()
    for _ in range(3):
        client.post("/cart/add", json={"product_id": "p1", "quantity": 1})
        client.post("/cart/checkout", json={"customer_name": "Jane Doe"})
    sales = client.get("/sales", params={"limit": 2}).json()
    assert len(sales) == 2
    assert sales == client.get("/sales").json()[:2]


def test_non_numeric_quantity_is_invalid_quantity():
    reset()
    r = client.post("/cart/add", json={"product_id": "p1", "quantity": "three"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_quantity"
    note = client.get("/notification").json()
    assert note["kind"] == "error"
    assert client.get("/cart").json()["lines"] == []

    r = client.post("/inventory/restock", json={"product_id": "p1", "quantity": "lots"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_quantity"


def test_other_validation_errors_keep_default_body():
    reset()
    r = client.post("/cart/checkout", json={"payment_method": "Cash"})
    assert r.status_code == 422
    assert isinstance(r.json()["detail"], list)
