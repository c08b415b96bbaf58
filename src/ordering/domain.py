"""Ordering bounded context: Shopping Cart, Checkout and Order lifecycle.

Handles the customer's cart (CQRS), the checkout flow that turns a cart into
an order, and the order status engine (CQRS) driven by fulfillment and
customer cancellation.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
