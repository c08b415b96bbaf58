"""Error taxonomy shared by the Ordering and Reviews bounded contexts.

Every domain error is a ``protean.exceptions.ValidationError`` so that it is
rolled back by the Unit of Work and rendered by Protean's FastAPI exception
handlers like any other rule violation. Each class adds a stable ``code`` and
a default human-readable message, keyed in ``messages`` by that code:

    >>> raise MissingReason()
    ValidationError({"missing_reason": ["A cancellation reason is required"]})

Kinds:
    - Validation errors: caught before any mutation, never retried.
    - State conflicts (``StateConflict``): the requested transition is illegal
      for the persisted state. Clients re-fetch before retrying.
    - Data integrity errors: persisted data outside its closed vocabulary.
"""

from protean.exceptions import ValidationError


class DomainError(ValidationError):
    """Base class for all coded domain errors."""

    code = "domain_error"
    default_message = "The request could not be processed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__({self.code: [self.message]})


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------
class IncompleteContact(DomainError):
    code = "incomplete_contact"
    default_message = "Email, first name and last name are required"


class IncompleteAddress(DomainError):
    code = "incomplete_address"
    default_message = "Street address, city and province are required"


class MissingPhone(DomainError):
    code = "missing_phone"
    default_message = "A contact phone number is required for delivery"


class MissingPaymentMethod(DomainError):
    code = "missing_payment_method"
    default_message = "Please select a supported payment method"


class MissingReason(DomainError):
    code = "missing_reason"
    default_message = "A cancellation reason is required"


class EmptyComment(DomainError):
    code = "empty_comment"
    default_message = "Please write a review comment"


class InvalidRating(DomainError):
    code = "invalid_rating"
    default_message = "Rating must be a whole number between 1 and 5"


class InvalidQuantity(DomainError):
    code = "invalid_quantity"
    default_message = "Quantity must be at least 1"


class EmptyCart(DomainError):
    code = "empty_cart"
    default_message = "Your cart is empty"


class ProductNotFound(DomainError):
    code = "product_not_found"
    default_message = "Product is not available"


class UnknownReviewItem(DomainError):
    code = "unknown_review_item"
    default_message = "Reviewed items must belong to the order"


class InvalidStatusValue(DomainError):
    code = "invalid_status_value"
    default_message = "Unknown order status"


# ---------------------------------------------------------------------------
# State conflicts
# ---------------------------------------------------------------------------
class StateConflict(DomainError):
    code = "state_conflict"
    default_message = "The order changed since it was last loaded"


class InvalidState(StateConflict):
    code = "invalid_state"
    default_message = "This action is not allowed in the order's current status"


class AlreadyReviewed(StateConflict):
    code = "already_reviewed"
    default_message = "This order has already been reviewed"


class OrderNotComplete(StateConflict):
    code = "order_not_complete"
    default_message = "Only completed orders can be reviewed"


# ---------------------------------------------------------------------------
# Data integrity
# ---------------------------------------------------------------------------
class UnknownOrderStatus(DomainError):
    code = "unknown_order_status"
    default_message = "Order has an unrecognized status"
