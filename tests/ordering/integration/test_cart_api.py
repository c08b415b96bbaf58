"""Integration tests for the cart endpoints via TestClient."""


class TestCartAuth:
    def test_anonymous_request_rejected(self, client):
        response = client.get("/cart")
        assert response.status_code == 401


class TestViewCart:
    def test_empty_cart(self, client, identity):
        response = client.get("/cart")

        assert response.status_code == 200
        data = response.json()
        assert data["customer_id"] == "cust-001"
        assert data["items"] == []
        assert data["grand_total"] == 0.0


class TestAddItem:
    def test_add_item_returns_priced_cart(self, client, identity):
        response = client.post("/cart/items", json={"product_id": "P2", "quantity": 3})

        assert response.status_code == 200
        data = response.json()
        assert data["total_items"] == 3
        assert data["total_price"] == 3000.0
        assert data["shipping_fee"] == 100.0
        assert data["grand_total"] == 3100.0
        assert data["items"][0]["original_unit_price"] == 1250.0

    def test_free_shipping_over_threshold(self, client, identity):
        response = client.post("/cart/items", json={"product_id": "P1", "quantity": 2})

        data = response.json()
        assert data["total_price"] == 10000.0
        assert data["shipping_fee"] == 0.0

    def test_unknown_product(self, client, identity):
        response = client.post("/cart/items", json={"product_id": "P404"})

        assert response.status_code == 400
        assert response.json()["code"] == "product_not_found"

    def test_invalid_quantity(self, client, identity):
        response = client.post("/cart/items", json={"product_id": "P1", "quantity": 0})

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_quantity"


class TestUpdateAndRemove:
    def test_update_quantity(self, client, identity):
        client.post("/cart/items", json={"product_id": "P3", "quantity": 1})

        response = client.put("/cart/items/P3", json={"quantity": 5})

        assert response.status_code == 200
        assert response.json()["total_items"] == 5

    def test_update_to_zero_removes(self, client, identity):
        client.post("/cart/items", json={"product_id": "P3", "quantity": 1})

        response = client.put("/cart/items/P3", json={"quantity": 0})

        assert response.json()["items"] == []

    def test_remove_item(self, client, identity):
        client.post("/cart/items", json={"product_id": "P1", "quantity": 1})
        client.post("/cart/items", json={"product_id": "P3", "quantity": 1})

        response = client.delete("/cart/items/P1")

        assert [item["product_id"] for item in response.json()["items"]] == ["P3"]
