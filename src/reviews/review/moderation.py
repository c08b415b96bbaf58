"""ModerateReview: approve or reject a pending review.

Reviews are held for moderation before they are published. Rejection needs a
reason; the order stays reviewed either way.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from reviews.domain import reviews
from reviews.review.review import ModerationAction, Review


@reviews.command(part_of="Review")
class ModerateReview:
    review_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    action = String(required=True)  # "approve" or "reject"
    reason = String()  # Required for rejection


@reviews.command_handler(part_of=Review)
class ModerateReviewHandler:
    @handle(ModerateReview)
    def moderate_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        try:
            action = ModerationAction(command.action.lower())
        except ValueError:
            raise ValidationError({"action": ["Action must be 'approve' or 'reject'"]}) from None

        if action == ModerationAction.APPROVE:
            review.approve(moderator_id=command.moderator_id, notes=command.reason)
        else:
            review.reject(moderator_id=command.moderator_id, reason=command.reason)

        repo.add(review)
