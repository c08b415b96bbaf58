import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import cart_router, checkout_router, fulfillment_router, order_router
from shared.http import register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(order_router)
    app.include_router(fulfillment_router)
    return TestClient(app)


CHECKOUT_BODY = {
    "contact": {"email": "juan@example.com", "first_name": "Juan", "last_name": "Dela Cruz"},
    "shipping": {
        "phone": "09171234567",
        "address_line": "123 Rizal St",
        "barangay": "San Roque",
        "city": "San Pablo City",
        "province": "Laguna",
        "postal_code": "4000",
    },
    "payment_method": "gcash",
}


@pytest.fixture()
def checkout_body():
    return {key: dict(value) if isinstance(value, dict) else value for key, value in CHECKOUT_BODY.items()}


@pytest.fixture()
def checked_out_order(client, identity, checkout_body):
    """A pending order for cust-001: 3 x P2 (3000) plus a 100 shipping fee."""
    client.post("/cart/items", json={"product_id": "P2", "quantity": 3})
    response = client.post("/checkout", json=checkout_body)
    assert response.status_code == 201
    return response.json()["order_id"]
