"""CompletedOrders: the orders the Review Gate will accept reviews for.

Populated by the OrderCompleted cross-domain event handler.
"""

import json

from protean.fields import DateTime, Identifier, String, Text

from reviews.domain import reviews


@reviews.projection
class CompletedOrders:
    order_id = Identifier(identifier=True, required=True)
    customer_id = Identifier(required=True)
    order_number = String(required=True, max_length=40)
    items = Text(required=True)  # JSON: list of {product_id, product_name}
    completed_at = DateTime(required=True)

    def line_items(self):
        return json.loads(self.items) if self.items else []
