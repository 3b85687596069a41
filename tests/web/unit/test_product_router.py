"""
Unit Tests: product catalog API

Tests for web/product_router.py through the FastAPI TestClient.
"""

PRODUCT_PAYLOAD = {
    "name": "Coffee beans",
    "description": "Arabica, 500 g",
    "price": 12.5,
    "old_price": 15.0,
    "images": ["https://cdn.test/coffee-beans.jpg"],
    "category": "coffee",
    "stock_quantity": 10,
}


def create_product(client, **overrides) -> dict:
    response = client.post("/api/products/", json={**PRODUCT_PAYLOAD, **overrides})
    assert response.status_code == 201
    return response.json()


class TestProductRoutes:

    def test_create_and_get(self, client):
        created = create_product(client)

        response = client.get(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert response.json()["name"] == "Coffee beans"
        assert response.json()["old_price"] == 15.0

    def test_get_unknown_product(self, client):
        response = client.get("/api/products/missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found."

    def test_by_category(self, client):
        create_product(client)
        create_product(client, name="Mug", price=5.0, category="kitchen")

        response = client.get("/api/products/category/kitchen")

        assert [product["name"] for product in response.json()] == ["Mug"]

    def test_price_filters(self, client):
        create_product(client)
        create_product(client, name="Espresso machine", price=1500.0)

        cheap = client.get("/api/products/filter").json()
        expensive = client.get("/api/products/filter/price", params={"min_price": 100}).json()

        assert [product["name"] for product in cheap] == ["Coffee beans"]
        assert [product["name"] for product in expensive] == ["Espresso machine"]

    def test_update(self, client):
        created = create_product(client)

        response = client.put(f"/api/products/{created['id']}", json={"price": 11.0, "in_stock": False})

        assert response.status_code == 200
        assert response.json()["price"] == 11.0
        assert response.json()["in_stock"] is False
        assert response.json()["description"] == "Arabica, 500 g"

    def test_update_unknown_product(self, client):
        assert client.put("/api/products/missing", json={"price": 1.0}).status_code == 404

    def test_delete(self, client):
        created = create_product(client)

        response = client.delete(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert response.json()["product_id"] == created["id"]
        assert client.get(f"/api/products/{created['id']}").status_code == 404
