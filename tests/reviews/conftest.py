import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def reviews_bed():
    from reviews.domain import reviews

    bed = DomainFixture(reviews)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(reviews_bed):
    with reviews_bed.domain_context():
        yield


ORDER_LINES = [
    {"product_id": "P1", "product_name": "Brass Floor Lamp"},
    {"product_id": "P2", "product_name": "Rattan Pendant"},
]


@pytest.fixture()
def complete_order():
    """Deliver an OrderCompleted event so the order becomes reviewable."""
    import json
    from datetime import UTC, datetime

    from reviews.review.ordering_events import OrderingEventsHandler
    from shared.events.ordering import OrderCompleted

    def _complete(order_id="order-001", customer_id="cust-001", items=None):
        OrderingEventsHandler().on_order_completed(
            OrderCompleted(
                order_id=order_id,
                customer_id=customer_id,
                order_number="ORD-20260101-ABCD1234",
                items=json.dumps(items or ORDER_LINES),
                completed_at=datetime.now(UTC),
            )
        )
        return order_id

    return _complete


@pytest.fixture()
def identity():
    """Sign in the buyer of the default completed order."""
    from shared.accounts import reset_identity_provider, set_identity_provider
    from shared.accounts.fake_adapter import StaticIdentityProvider

    provider = StaticIdentityProvider()
    provider.sign_in("cust-001", "juan@example.com", "Juan", "Dela Cruz")
    set_identity_provider(provider)
    yield provider
    reset_identity_provider()
