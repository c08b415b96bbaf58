"""Repository for the ShoppingCart aggregate."""

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering


@ordering.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def find_for_customer(self, customer_id) -> ShoppingCart | None:
        """Return the customer's cart, or None if they never had one."""
        carts = self._dao.query.filter(customer_id=str(customer_id)).all()
        return carts.items[0] if carts.items else None

    def for_customer(self, customer_id) -> ShoppingCart:
        """Return the customer's cart, creating an empty (unsaved) one if needed."""
        return self.find_for_customer(customer_id) or ShoppingCart.create(customer_id=customer_id)
