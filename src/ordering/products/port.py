"""Product catalogue port (abstract interface).

Defines the contract the cart relies on when a customer adds a product. The
catalogue itself (listing, search, pricing rules) lives outside the ordering
domain; the cart only copies a price snapshot from it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductSnapshot:
    """The catalogue's view of a product at the moment it is read."""

    product_id: str
    name: str
    price: float
    image: str | None = None
    original_price: float | None = None  # Pre-sale price when the product is on sale


class ProductCatalog(ABC):
    """Abstract product catalogue interface."""

    @abstractmethod
    def get(self, product_id: str) -> ProductSnapshot | None:
        """Return the product, or None if it is unknown or unpublished."""
        ...
