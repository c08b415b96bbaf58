"""Rendering of coded domain errors as HTTP responses."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.exceptions import ObjectNotFoundError
from shared.errors import (
    AlreadyReviewed,
    EmptyCart,
    InvalidState,
    InvalidStatusValue,
    MissingPhone,
    OrderNotComplete,
    ProductNotFound,
    UnknownOrderStatus,
)
from shared.http import register_error_handlers, status_code_for


@pytest.mark.parametrize(
    "exc, status_code",
    [
        (EmptyCart(), 400),
        (MissingPhone(), 400),
        (ProductNotFound(), 400),
        (InvalidStatusValue(), 400),
        (InvalidState(), 409),
        (AlreadyReviewed(), 409),
        (OrderNotComplete(), 409),
        (UnknownOrderStatus(), 500),
    ],
)
def test_status_codes(exc, status_code):
    assert status_code_for(exc) == status_code


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom/{kind}")
    async def boom(kind: str):
        if kind == "state":
            raise InvalidState("Order ORD-1 is complete")
        if kind == "missing":
            raise ObjectNotFoundError("Order with identifier x does not exist")
        raise UnknownOrderStatus("Unrecognized order status: 'lost'")

    return TestClient(app, raise_server_exceptions=False)


class TestErrorBodies:
    def test_conflict_body(self, client):
        response = client.get("/boom/state")

        assert response.status_code == 409
        assert response.json() == {"code": "invalid_state", "message": "Order ORD-1 is complete"}

    def test_not_found_body(self, client):
        response = client.get("/boom/missing")

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_data_integrity_body(self, client):
        response = client.get("/boom/integrity")

        assert response.status_code == 500
        assert response.json()["code"] == "unknown_order_status"
