"""Shopping Cart aggregate (CQRS): a customer's pre-purchase selection.

The cart holds one line per product with a price snapshot copied from the
catalogue when the product was first added. Totals are always recomputed from
the current lines, never stored. After an order is placed the cart is emptied
(not deleted) and reused for the customer's next purchase.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String
from shared.errors import InvalidQuantity

from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.domain import ordering


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)  # Sale price actually charged
    original_unit_price = Float(min_value=0.0)  # Catalogue price before any sale
    image = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def line_total(self):
        return round(self.unit_price * self.quantity, 2)


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def line_quantities_must_be_positive(self):
        if any(item.quantity is None or item.quantity < 1 for item in self.items):
            raise ValidationError({"items": ["Cart lines must have a quantity of at least 1"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(
            customer_id=customer_id,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Derived totals
    # -------------------------------------------------------------------
    @property
    def total_items(self):
        return sum(item.quantity for item in self.items)

    @property
    def total_price(self):
        return round(sum(item.unit_price * item.quantity for item in self.items), 2)

    def totals(self):
        return {"total_items": self.total_items, "total_price": self.total_price}

    def _find(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, name, unit_price, quantity, image=None, original_unit_price=None):
        """Add a product to the cart, or increase its quantity if already present.

        The price snapshot of an existing line is kept; only the quantity grows.
        """
        if quantity is None or quantity < 1:
            raise InvalidQuantity()

        now = datetime.now(UTC)
        existing = self._find(product_id)
        if existing:
            existing.quantity += quantity
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    name=name,
                    unit_price=unit_price,
                    original_unit_price=original_unit_price,
                    image=image,
                    quantity=quantity,
                    added_at=now,
                )
            )
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                quantity=quantity,
                unit_price=existing.unit_price if existing else unit_price,
            )
        )

    def update_quantity(self, product_id, quantity):
        """Set a line's quantity exactly. Zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(product_id)
            return

        item = self._find(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        item = self._find(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
            )
        )

    def clear(self):
        """Empty the cart. Only called once an order has been persisted."""
        items_cleared = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                items_cleared=items_cleared,
            )
        )
