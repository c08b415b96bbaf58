"""Review aggregate (CQRS): a customer's feedback on one completed order.

A review covers some or all of the order's line items and carries a single
star rating and comment. Whether an order has been reviewed is tracked apart
from the order itself (see ``ReviewedOrders``), so reviewing never touches
fulfillment status.

State Machine (3 states):
    PENDING → PUBLISHED | REJECTED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text
from shared.errors import EmptyComment, InvalidRating, InvalidState

from reviews.domain import reviews
from reviews.review.events import ReviewApproved, ReviewRejected, ReviewSubmitted

MIN_RATING = 1
MAX_RATING = 5


class ReviewStatus(Enum):
    PENDING = "pending"
    PUBLISHED = "published"
    REJECTED = "rejected"


class ModerationAction(Enum):
    APPROVE = "approve"
    REJECT = "reject"


_VALID_TRANSITIONS = {
    ReviewStatus.PENDING: {ReviewStatus.PUBLISHED, ReviewStatus.REJECTED},
    ReviewStatus.PUBLISHED: set(),
    ReviewStatus.REJECTED: set(),
}


def validate_rating(rating):
    """Accept only whole-number ratings from 1 to 5."""
    if isinstance(rating, bool) or not isinstance(rating, int | float):
        raise InvalidRating()
    if isinstance(rating, float) and not rating.is_integer():
        raise InvalidRating()
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRating()
    return int(rating)


def validate_comment(comment):
    if comment is None or not comment.strip():
        raise EmptyComment()
    return comment.strip()


@reviews.entity(part_of="Review")
class ReviewedItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)


@reviews.aggregate
class Review:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    rating = Integer(required=True, min_value=MIN_RATING, max_value=MAX_RATING)
    comment = Text(required=True)
    items = HasMany(ReviewedItem)
    status = String(choices=ReviewStatus, default=ReviewStatus.PENDING.value)
    moderation_notes = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def must_cover_at_least_one_item(self):
        if not self.items:
            raise ValidationError({"items": ["A review must cover at least one item"]})

    @classmethod
    def submit(cls, order_id, customer_id, rating, comment, items):
        """Create a pending review.

        Args:
            items: List of dicts with product_id and product_name, already
                   checked against the order's line items.
        """
        rating = validate_rating(rating)
        comment = validate_comment(comment)
        if not items:
            raise ValidationError({"items": ["A review must cover at least one item"]})
        now = datetime.now(UTC)

        review = cls(
            order_id=order_id,
            customer_id=customer_id,
            rating=rating,
            comment=comment,
            items=[ReviewedItem(product_id=i["product_id"], product_name=i["product_name"]) for i in items],
            status=ReviewStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                order_id=str(order_id),
                customer_id=str(customer_id),
                rating=rating,
                comment=comment,
                items=json.dumps(items),
                submitted_at=now,
            )
        )
        return review

    def _assert_can_transition(self, target_status):
        current = ReviewStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise InvalidState(f"Review is already {current.value}")

    def approve(self, moderator_id, notes=None):
        self._assert_can_transition(ReviewStatus.PUBLISHED)
        now = datetime.now(UTC)
        self.status = ReviewStatus.PUBLISHED.value
        self.moderation_notes = notes
        self.updated_at = now

        self.raise_(
            ReviewApproved(
                review_id=str(self.id),
                order_id=str(self.order_id),
                moderator_id=str(moderator_id),
                approved_at=now,
            )
        )

    def reject(self, moderator_id, reason):
        self._assert_can_transition(ReviewStatus.REJECTED)
        if not reason or not reason.strip():
            raise ValidationError({"reason": ["Reason is required when rejecting a review"]})

        now = datetime.now(UTC)
        self.status = ReviewStatus.REJECTED.value
        self.moderation_notes = reason.strip()
        self.updated_at = now

        self.raise_(
            ReviewRejected(
                review_id=str(self.id),
                order_id=str(self.order_id),
                moderator_id=str(moderator_id),
                reason=reason.strip(),
                rejected_at=now,
            )
        )
