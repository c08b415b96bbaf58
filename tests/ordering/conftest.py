import pytest
from shared.accounts import reset_identity_provider, set_identity_provider
from shared.accounts.fake_adapter import StaticIdentityProvider
from ordering.products import reset_catalog, set_catalog
from ordering.products.fake_adapter import InMemoryCatalog
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def catalog():
    """A fresh catalogue per test, stocked with a few lamps."""
    catalog = InMemoryCatalog()
    catalog.add_product("P1", "Brass Floor Lamp", 5000.0, image="p1.jpg")
    catalog.add_product("P2", "Rattan Pendant", 1000.0, image="p2.jpg", original_price=1250.0)
    catalog.add_product("P3", "Desk Lamp", 500.0)
    set_catalog(catalog)
    yield catalog
    reset_catalog()


@pytest.fixture()
def identity():
    provider = StaticIdentityProvider()
    provider.sign_in("cust-001", "juan@example.com", "Juan", "Dela Cruz")
    set_identity_provider(provider)
    yield provider
    reset_identity_provider()


@pytest.fixture()
def place_order():
    """Place a pending order directly, bypassing the cart."""
    import json

    from ordering.order.creation import PlaceOrder
    from protean import current_domain

    def _place(customer_id="cust-001", items=None, shipping_fee=100.0, **kwargs):
        items = items or [{"product_id": "P2", "name": "Rattan Pendant", "unit_price": 1000.0, "quantity": 3}]
        address = {
            "recipient_name": "Juan Dela Cruz",
            "phone": "09171234567",
            "address_line": "123 Rizal St",
            "barangay": "San Roque",
            "city": "San Pablo City",
            "province": "Laguna",
            "postal_code": "4000",
        }
        return current_domain.process(
            PlaceOrder(
                customer_id=customer_id,
                items=json.dumps(items),
                shipping_address=json.dumps(address),
                payment_method=kwargs.pop("payment_method", "gcash"),
                shipping_fee=shipping_fee,
                **kwargs,
            ),
            asynchronous=False,
        )

    return _place
