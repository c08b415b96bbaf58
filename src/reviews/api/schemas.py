"""Pydantic request/response schemas for the Reviews API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    order_id: str
    rating: float | None = None  # Whole numbers 1-5, checked by the Review Gate
    comment: str | None = None
    items: list[str] | None = None  # Product ids; defaults to every order line


class ModerateReviewRequest(BaseModel):
    moderator_id: str
    action: str  # "approve" or "reject"
    reason: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewIdResponse(BaseModel):
    review_id: str


class ReviewStatusResponse(BaseModel):
    order_id: str
    is_reviewed: bool


class StatusResponse(BaseModel):
    status: str = "ok"
