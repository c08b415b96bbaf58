"""FastAPI routes for the Reviews bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts).
"""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain
from shared.accounts.port import CurrentUser
from shared.http import current_user

from reviews.api.schemas import (
    ModerateReviewRequest,
    ReviewIdResponse,
    ReviewStatusResponse,
    StatusResponse,
    SubmitReviewRequest,
)
from reviews.projections.reviewed_orders import is_reviewed
from reviews.review.moderation import ModerateReview
from reviews.review.submission import SubmitReview

review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest, user: CurrentUser = Depends(current_user)) -> ReviewIdResponse:
    """Review one of the signed-in customer's completed orders."""
    command = SubmitReview(
        order_id=body.order_id,
        customer_id=user.id,
        rating=body.rating,
        comment=body.comment,
        items=json.dumps(body.items) if body.items else None,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


@review_router.put("/{review_id}/moderate", response_model=StatusResponse)
async def moderate_review(review_id: str, body: ModerateReviewRequest) -> StatusResponse:
    """Approve or reject a review."""
    command = ModerateReview(
        review_id=review_id,
        moderator_id=body.moderator_id,
        action=body.action,
        reason=body.reason,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.get("/orders/{order_id}", response_model=ReviewStatusResponse)
async def review_status(order_id: str) -> ReviewStatusResponse:
    """Whether the order already has a review."""
    return ReviewStatusResponse(order_id=order_id, is_reviewed=is_reviewed(order_id))
