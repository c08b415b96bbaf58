"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.items import AddToCart
from ordering.order.cancellation import CancelOrder
from ordering.order.fulfillment import ApproveOrder, CompleteOrder, DispatchOrder
from ordering.order.locking import process_serialized
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, then
from shared.errors import DomainError


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def shopper():
    return {"customer_id": "cust-001"}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the customer "{customer_id}" is shopping'))
def _(shopper, customer_id):
    shopper["customer_id"] = customer_id


@given(parsers.cfparse('the cart holds {quantity:d} of "{product_id}"'))
def _(shopper, quantity, product_id):
    current_domain.process(
        AddToCart(customer_id=shopper["customer_id"], product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


@given(parsers.cfparse('the customer "{customer_id}" placed an order'), target_fixture="order_id")
def _(place_order, shopper, customer_id):
    shopper["customer_id"] = customer_id
    return place_order(customer_id=customer_id)


@given("the order was approved")
def _(order_id):
    process_serialized(ApproveOrder(order_id=order_id))


@given("the order was completed")
def _(order_id):
    for command in (ApproveOrder, DispatchOrder, CompleteOrder):
        process_serialized(command(order_id=order_id))


@given("the order was cancelled")
def _(order_id, shopper):
    process_serialized(CancelOrder(order_id=order_id, customer_id=shopper["customer_id"], reason="No longer needed"))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then(parsers.cfparse('the order action fails with "{code}"'))
def _(error, code):
    assert isinstance(error["exc"], DomainError), f"Expected {code}, got {error['exc']!r}"
    assert error["exc"].code == code
