"""Domain events for the Review aggregate.

All events are versioned, immutable facts representing state changes.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from reviews.domain import reviews


@reviews.event(part_of="Review")
class ReviewSubmitted:
    """A customer reviewed one of their completed orders."""

    __version__ = 1

    review_id = Identifier(required=True)
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)
    items = Text(required=True)  # JSON: list of {product_id, product_name}
    submitted_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewApproved:
    """A moderator published the review."""

    __version__ = 1

    review_id = Identifier(required=True)
    order_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    approved_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewRejected:
    """A moderator rejected the review. The order stays reviewed."""

    __version__ = 1

    review_id = Identifier(required=True)
    order_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    reason = String(required=True)
    rejected_at = DateTime(required=True)
