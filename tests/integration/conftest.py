"""Fixtures for cross-domain integration tests.

These tests drive an order from checkout to completion in the Ordering
domain and hand the completion over to the Reviews domain, the way the
Engine would deliver the ``OrderCompleted`` event between the two.
"""

import os

import pytest
from ordering.products import reset_catalog, set_catalog
from ordering.products.fake_adapter import InMemoryCatalog


@pytest.fixture(scope="session")
def _ordering_domain(request):
    """Initialize the ordering domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from ordering.domain import ordering

    ordering.init()
    return ordering


@pytest.fixture(scope="session")
def _reviews_domain(request):
    """Initialize the reviews domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from reviews.domain import reviews

    reviews.init()
    return reviews


def _reset_stores(domain):
    for _, provider in domain.providers.items():
        provider._data_reset()

    for _, broker in domain.brokers.items():
        broker._data_reset()

    domain.event_store.store._data_reset()


@pytest.fixture
def ordering_ctx(_ordering_domain):
    """Push ordering domain context for a test, with cleanup."""
    ctx = _ordering_domain.domain_context()
    ctx.push()

    yield _ordering_domain

    _reset_stores(_ordering_domain)
    ctx.pop()


@pytest.fixture
def reviews_ctx(_reviews_domain):
    """Reviews domain, wiped after the test. Push its context where needed."""
    yield _reviews_domain

    with _reviews_domain.domain_context():
        _reset_stores(_reviews_domain)


@pytest.fixture(autouse=True)
def catalog():
    catalog = InMemoryCatalog()
    catalog.add_product("P1", "Brass Floor Lamp", 5000.0)
    catalog.add_product("P2", "Rattan Pendant", 1000.0, original_price=1250.0)
    set_catalog(catalog)
    yield catalog
    reset_catalog()
