"""Shared BDD fixtures and step definitions for the Reviews domain."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers
from reviews.review.submission import SubmitReview


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@given(parsers.cfparse('order "{order_id}" of customer "{customer_id}" was completed'))
def _(complete_order, order_id, customer_id):
    complete_order(order_id=order_id, customer_id=customer_id)


@given(parsers.cfparse('customer "{customer_id}" already reviewed order "{order_id}"'))
def _(customer_id, order_id):
    current_domain.process(
        SubmitReview(order_id=order_id, customer_id=customer_id, rating=5, comment="First review"),
        asynchronous=False,
    )
