"""ReviewedOrders: side index of orders that already have a review.

Kept apart from order status so that "reviewed" can never be mistaken for a
fulfillment state.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier
from protean.utils.globals import current_domain

from reviews.domain import reviews


@reviews.projection
class ReviewedOrders:
    order_id = Identifier(identifier=True, required=True)
    review_id = Identifier(required=True)
    reviewed_at = DateTime(required=True)


def is_reviewed(order_id) -> bool:
    try:
        current_domain.repository_for(ReviewedOrders).get(str(order_id))
    except ObjectNotFoundError:
        return False
    return True
