"""Reviews bounded context: the Review Gate.

Accepts at most one review per completed order and tracks which orders have
been reviewed. Learns which orders are complete from the Ordering domain's
``OrderCompleted`` events; never reads or mutates orders directly.
"""

from protean.domain import Domain

from reviews.utils.logging import get_logger

reviews = Domain(name="reviews")

logger = get_logger(__name__)
