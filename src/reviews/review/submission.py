"""SubmitReview: the Review Gate.

Checks, in order:
    1. The order is known to be complete (``CompletedOrders``) and belongs to
       the reviewer → else ``OrderNotComplete``
    2. The order has no review yet → else ``AlreadyReviewed``, whatever the
       content of the new submission
    3. The comment is not blank → else ``EmptyComment``
    4. The rating is a whole number from 1 to 5 → else ``InvalidRating``
    5. Reviewed items are drawn from the order's lines → else ``UnknownReviewItem``

On success the review is stored and the order is recorded in ``ReviewedOrders``
within the same unit of work.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Text
from protean.utils.globals import current_domain
from shared.errors import AlreadyReviewed, OrderNotComplete, UnknownReviewItem

from reviews.domain import reviews
from reviews.projections.completed_orders import CompletedOrders
from reviews.projections.reviewed_orders import ReviewedOrders
from reviews.review.review import Review, validate_comment, validate_rating

logger = structlog.get_logger(__name__)


@reviews.command(part_of="Review")
class SubmitReview:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    rating = Float()  # Whole numbers 1-5, checked by the gate
    comment = Text()
    items = Text()  # JSON: list of product ids; all order lines when omitted


def _completed_order(order_id, customer_id):
    try:
        order = current_domain.repository_for(CompletedOrders).get(str(order_id))
    except ObjectNotFoundError:
        raise OrderNotComplete() from None

    if str(order.customer_id) != str(customer_id):
        raise OrderNotComplete()
    return order


def _select_items(order, requested_ids):
    lines = order.line_items()
    if not requested_ids:
        return lines

    by_id = {str(line["product_id"]): line for line in lines}
    unknown = [pid for pid in requested_ids if str(pid) not in by_id]
    if unknown:
        raise UnknownReviewItem(f"Not part of this order: {', '.join(str(pid) for pid in unknown)}")
    return [by_id[str(pid)] for pid in dict.fromkeys(str(pid) for pid in requested_ids)]


@reviews.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        order = _completed_order(command.order_id, command.customer_id)

        repo = current_domain.repository_for(Review)
        if repo.exists_for_order(command.order_id):
            raise AlreadyReviewed()

        validate_comment(command.comment)
        validate_rating(command.rating)

        requested_ids = json.loads(command.items) if command.items else []
        items = _select_items(order, requested_ids)

        review = Review.submit(
            order_id=command.order_id,
            customer_id=command.customer_id,
            rating=command.rating,
            comment=command.comment,
            items=items,
        )
        repo.add(review)

        current_domain.repository_for(ReviewedOrders).add(
            ReviewedOrders(
                order_id=str(command.order_id),
                review_id=str(review.id),
                reviewed_at=review.created_at,
            )
        )

        logger.info("Review submitted", order_id=str(command.order_id), review_id=str(review.id))
        return str(review.id)
