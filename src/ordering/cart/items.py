"""Cart item management: commands and handler.

Carts are addressed by customer: every customer has at most one cart, created
empty the first time an item is added.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain
from shared.errors import ProductNotFound

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering
from ordering.products import get_catalog

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)  # Range enforced by the aggregate


@ordering.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    """Set a line's quantity. Zero or a negative quantity removes the line."""

    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    """Empty the customer's cart after their order has been placed."""

    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = get_catalog().get(str(command.product_id))
        if product is None:
            raise ProductNotFound(f"Product {command.product_id} is not available")

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        cart.add_item(
            product_id=product.product_id,
            name=product.name,
            unit_price=product.price,
            quantity=command.quantity,
            image=product.image,
            original_unit_price=product.original_price,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        cart.update_quantity(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        cart.remove_item(product_id=command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_customer(command.customer_id)
        if cart is None:
            logger.info("No cart to clear", customer_id=str(command.customer_id))
            return
        cart.clear()
        repo.add(cart)
