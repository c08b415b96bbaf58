"""Domain events for the Order aggregate.

All events are versioned, immutable facts representing state changes.
Events are used for:
- Updating projections and notifying the customer
- Cross-domain communication (OrderCompleted opens the review gate)
"""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer checked out their cart and a pending order was created."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_number = String(required=True)
    items = Text(required=True)  # JSON: list of line snapshot dicts
    total_amount = Float(required=True)
    shipping_fee = Float(required=True)
    payment_method = String(required=True)
    delivery_method = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderApproved:
    """Fulfillment accepted the order for processing."""

    __version__ = 1

    order_id = Identifier(required=True)
    approved_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDispatched:
    """The order left the warehouse and is in transit to the customer."""

    __version__ = 1

    order_id = Identifier(required=True)
    tracking_number = String()
    dispatched_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCompleted:
    """The order was delivered. Terminal state; the order may now be reviewed."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_number = String(required=True)
    items = Text(required=True)  # JSON: list of {product_id, product_name}
    completed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """The customer cancelled a pending order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = String(required=True)
    cancelled_at = DateTime(required=True)


@ordering.event(part_of="Order")
class ShippingFeeConfirmed:
    """The customer accepted the shipping fee quoted on a pending order."""

    __version__ = 1

    order_id = Identifier(required=True)
    shipping_fee = Float(required=True)
    confirmed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class AdminNoteAdded:
    """Staff attached an internal note to the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    note = Text(required=True)
    added_at = DateTime(required=True)
