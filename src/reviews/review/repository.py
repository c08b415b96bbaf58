"""Repository for the Review aggregate."""

from reviews.domain import reviews
from reviews.review.review import Review


@reviews.repository(part_of=Review)
class ReviewRepository:
    def exists_for_order(self, order_id) -> bool:
        return bool(self._dao.query.filter(order_id=str(order_id)).all().items)

    def find_for_order(self, order_id) -> Review | None:
        found = self._dao.query.filter(order_id=str(order_id)).all()
        return found.items[0] if found.items else None
