"""Cross-domain event contracts for Ordering domain events.

These classes define the event shape for consumption by other domains
(e.g., the Reviews domain to open the review gate once an order is
complete). They are registered as external events via
domain.register_external_event() with matching __type__ strings so Protean's
stream deserialization works correctly.

The source-of-truth events are in src/ordering/order/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, String, Text


class OrderCompleted(BaseEvent):
    """An order reached its terminal ``complete`` status.

    Consumed by the Reviews domain to record which orders may be reviewed.
    """

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_number = String(required=True)
    items = Text(required=True)  # JSON list of {product_id, product_name}
    completed_at = DateTime(required=True)
