"""In-memory product catalogue for development and testing.

Products are registered at runtime with ``add_product`` and can be repriced
with ``set_price`` to simulate catalogue changes after checkout.
"""

from dataclasses import replace

from ordering.products.port import ProductCatalog, ProductSnapshot


class InMemoryCatalog(ProductCatalog):
    """Configurable in-memory product catalogue."""

    def __init__(self) -> None:
        self.products: dict[str, ProductSnapshot] = {}
        self.lookups: list[str] = []

    def add_product(
        self,
        product_id: str,
        name: str,
        price: float,
        image: str | None = None,
        original_price: float | None = None,
    ) -> ProductSnapshot:
        product = ProductSnapshot(
            product_id=str(product_id),
            name=name,
            price=price,
            image=image,
            original_price=original_price,
        )
        self.products[product.product_id] = product
        return product

    def set_price(self, product_id: str, price: float) -> None:
        self.products[str(product_id)] = replace(self.products[str(product_id)], price=price)

    def get(self, product_id: str) -> ProductSnapshot | None:
        self.lookups.append(str(product_id))
        return self.products.get(str(product_id))


DEMO_PRODUCTS = [
    {"product_id": "LMP-1001", "name": "Brass Arc Floor Lamp", "price": 4500.0, "original_price": 5200.0},
    {"product_id": "LMP-1002", "name": "Rattan Pendant Light", "price": 2890.0},
    {"product_id": "LMP-1003", "name": "Crystal Chandelier (6-arm)", "price": 12500.0, "original_price": 14999.0},
    {"product_id": "LMP-1004", "name": "LED Desk Lamp", "price": 1299.0},
    {"product_id": "LMP-1005", "name": "Outdoor Wall Sconce", "price": 1750.0},
]


def load_demo_products(catalog: InMemoryCatalog) -> InMemoryCatalog:
    """Stock an in-memory catalogue with a few products for local runs and load tests."""
    for product in DEMO_PRODUCTS:
        catalog.add_product(**product)
    return catalog
