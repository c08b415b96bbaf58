"""Inbound cross-domain event handler: Reviews reacts to Ordering events.

Listens for OrderCompleted events from the Ordering domain to populate the
CompletedOrders projection, which the Review Gate consults before accepting
a review.

Cross-domain events are imported from shared.events.ordering and registered
as external events via reviews.register_external_event().
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from shared.events.ordering import OrderCompleted

from reviews.domain import reviews
from reviews.projections.completed_orders import CompletedOrders
from reviews.review.review import Review

logger = structlog.get_logger(__name__)

# Register external event so Protean can deserialize it
reviews.register_external_event(OrderCompleted, "Ordering.OrderCompleted.v1")


def _is_recorded(repo, order_id) -> bool:
    try:
        repo.get(str(order_id))
    except ObjectNotFoundError:
        return False
    return True


@reviews.event_handler(part_of=Review, stream_category="ordering::order")
class OrderingEventsHandler:
    """Reacts to Ordering domain events to open the Review Gate."""

    @handle(OrderCompleted)
    def on_order_completed(self, event: OrderCompleted) -> None:
        repo = current_domain.repository_for(CompletedOrders)
        if _is_recorded(repo, event.order_id):
            # Delivery is at least once; the first record stands
            logger.info("Order already open for review", order_id=str(event.order_id))
            return

        repo.add(
            CompletedOrders(
                order_id=str(event.order_id),
                customer_id=str(event.customer_id),
                order_number=event.order_number,
                items=event.items,
                completed_at=event.completed_at,
            )
        )
        logger.info("Order open for review", order_id=str(event.order_id))
