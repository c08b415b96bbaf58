"""Order aggregate (CQRS): the core of the ordering domain.

An Order is created from the customer's cart at checkout. Identity fields and
the line-item price snapshot are frozen at creation; only the fulfillment
fields change afterwards.

State Machine (5 states):
    PENDING → APPROVED → IN_TRANSIT → COMPLETE
    PENDING → CANCELLED (customer, reason required)

Fulfillment advances one step at a time; COMPLETE and CANCELLED are terminal.
Every status change bumps ``revision`` so concurrent writers can detect that
the order moved underneath them.
"""

import json
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

import structlog
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)
from shared.errors import InvalidState, InvalidStatusValue, MissingReason, UnknownOrderStatus

from ordering.domain import ordering
from ordering.order.events import (
    AdminNoteAdded,
    OrderApproved,
    OrderCancelled,
    OrderCompleted,
    OrderDispatched,
    OrderPlaced,
    ShippingFeeConfirmed,
)

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    IN_TRANSIT = "in_transit"
    COMPLETE = "complete"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    GCASH = "gcash"
    MAYA = "maya"
    CASH_ON_DELIVERY = "cash_on_delivery"


class DeliveryMethod(Enum):
    SHIPPING = "shipping"
    PICKUP = "pickup"


# Values written by older releases, mapped once at the read boundary
_LEGACY_STATUSES = {
    "delivering": OrderStatus.IN_TRANSIT,
}

# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.APPROVED, OrderStatus.CANCELLED},
    OrderStatus.APPROVED: {OrderStatus.IN_TRANSIT},
    OrderStatus.IN_TRANSIT: {OrderStatus.COMPLETE},
    OrderStatus.COMPLETE: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Fulfillment progression, one step at a time
_NEXT_FULFILLMENT_STATUS = {
    OrderStatus.PENDING: OrderStatus.APPROVED,
    OrderStatus.APPROVED: OrderStatus.IN_TRANSIT,
    OrderStatus.IN_TRANSIT: OrderStatus.COMPLETE,
}


def _lookup_status(value):
    if isinstance(value, OrderStatus):
        return value

    key = str(value or "").strip().lower()
    if key in _LEGACY_STATUSES:
        return _LEGACY_STATUSES[key]
    try:
        return OrderStatus(key)
    except ValueError:
        return None


def normalize_status(value):
    """Map a persisted status value onto ``OrderStatus``.

    ``delivering`` is accepted as the legacy spelling of ``in_transit``. Any
    other unknown value is a data-integrity error and is never coerced.
    """
    status = _lookup_status(value)
    if status is None:
        logger.error("Unrecognized order status in persisted data", status=value)
        raise UnknownOrderStatus(f"Unrecognized order status: {value!r}")
    return status


def parse_status(value):
    """Read a status supplied by a client, e.g. a list filter or a fulfillment feed.

    Accepts the same spellings as ``normalize_status``, but an unknown value is
    bad input rather than bad data.
    """
    status = _lookup_status(value)
    if status is None:
        accepted = ", ".join(option.value for option in OrderStatus)
        raise InvalidStatusValue(f"Unknown order status {value!r}; expected one of {accepted}")
    return status


def generate_order_number(now=None):
    now = now or datetime.now(UTC)
    return f"ORD-{now:%Y%m%d}-{uuid4().hex[:8].upper()}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """Where the order goes and who receives it, captured at checkout.

    Stored as discrete components; the one-line delivery address is derived
    on demand so it never has to be parsed back.
    """

    recipient_name = String(required=True, max_length=255)
    phone = String(required=True, max_length=30)
    address_line = String(required=True, max_length=255)
    barangay = String(max_length=100)
    city = String(required=True, max_length=100)
    province = String(required=True, max_length=100)
    postal_code = String(max_length=20)

    @property
    def full_address(self):
        parts = (self.address_line, self.barangay, self.city, self.province, self.postal_code)
        return ", ".join(part.strip() for part in parts if part and part.strip())


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A frozen line-item snapshot: what was bought and at what price."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    image = String(max_length=500)
    unit_price = Float(required=True, min_value=0.0)  # Price actually charged
    discount = Float(default=0.0, min_value=0.0)  # Total deducted on the line
    quantity = Integer(required=True, min_value=1)

    @property
    def original_unit_price(self):
        if self.discount:
            return round(self.unit_price + self.discount / self.quantity, 2)
        return self.unit_price

    @property
    def line_total(self):
        return round(self.unit_price * self.quantity, 2)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    order_number = String(required=True, max_length=40)
    status = String(max_length=20, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(required=True, choices=PaymentMethod)
    delivery_method = String(choices=DeliveryMethod, default=DeliveryMethod.SHIPPING.value)
    shipping_fee = Float(default=0.0, min_value=0.0)
    shipping_fee_confirmed = Boolean(default=False)
    total_amount = Float(required=True, min_value=0.0)  # Items subtotal, excludes shipping
    customer_notes = Text()
    checkout_key = String(max_length=100)
    tracking_number = String(max_length=255)
    cancellation_reason = String(max_length=500)
    admin_notes = Text()
    revision = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()
    approved_at = DateTime()
    dispatched_at = DateTime()
    completed_at = DateTime()
    cancelled_at = DateTime()

    @invariant.post
    def status_must_be_recognized(self):
        normalize_status(self.status)

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        items_data,
        shipping_address,
        payment_method,
        shipping_fee=0.0,
        delivery_method=DeliveryMethod.SHIPPING.value,
        customer_notes=None,
        checkout_key=None,
    ):
        """Create a pending order from checkout data.

        Args:
            customer_id: The customer placing the order.
            items_data: List of dicts with product_id, name, image,
                        unit_price, discount, quantity.
            shipping_address: Dict with recipient_name, phone, address_line,
                              barangay, city, province, postal_code.
            payment_method: One of ``PaymentMethod`` values.
            shipping_fee: Fee computed by the pricing calculator.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        total_amount = round(sum(item["unit_price"] * item["quantity"] for item in items_data), 2)

        order = cls(
            customer_id=customer_id,
            order_number=generate_order_number(now),
            status=OrderStatus.PENDING.value,
            items=[OrderItem(**item) for item in items_data],
            shipping_address=ShippingAddress(**shipping_address),
            payment_method=payment_method,
            delivery_method=delivery_method,
            shipping_fee=shipping_fee,
            shipping_fee_confirmed=False,
            total_amount=total_amount,
            customer_notes=customer_notes,
            checkout_key=checkout_key,
            revision=0,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                order_number=order.order_number,
                items=json.dumps(items_data),
                total_amount=total_amount,
                shipping_fee=shipping_fee,
                payment_method=payment_method,
                delivery_method=delivery_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def current_status(self):
        return normalize_status(self.status)

    @property
    def grand_total(self):
        return round((self.total_amount or 0.0) + (self.shipping_fee or 0.0), 2)

    def review_items(self):
        """The ``{product_id, product_name}`` pairs a review may refer to."""
        return [{"product_id": str(item.product_id), "product_name": item.name} for item in self.items]

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    def assert_revision(self, expected_revision):
        """Reject writers that loaded the order before its last status change."""
        if expected_revision is not None and expected_revision != self.revision:
            raise InvalidState(
                f"Order {self.order_number} was updated (revision {self.revision}, expected {expected_revision})"
            )

    def _assert_can_transition(self, target_status):
        current = self.current_status
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidState(
                f"Cannot move order {self.order_number} from {current.value} to {target_status.value}"
            )

    def _move_to(self, target_status, now):
        self.status = target_status.value
        self.revision = (self.revision or 0) + 1
        self.updated_at = now

    # -------------------------------------------------------------------
    # Fulfillment transitions
    # -------------------------------------------------------------------
    def approve(self):
        self._assert_can_transition(OrderStatus.APPROVED)
        now = datetime.now(UTC)
        self._move_to(OrderStatus.APPROVED, now)
        self.approved_at = now

        self.raise_(OrderApproved(order_id=str(self.id), approved_at=now))

    def dispatch(self, tracking_number=None):
        self._assert_can_transition(OrderStatus.IN_TRANSIT)
        now = datetime.now(UTC)
        self._move_to(OrderStatus.IN_TRANSIT, now)
        self.dispatched_at = now
        if tracking_number:
            self.tracking_number = tracking_number

        self.raise_(
            OrderDispatched(
                order_id=str(self.id),
                tracking_number=tracking_number,
                dispatched_at=now,
            )
        )

    def complete(self):
        self._assert_can_transition(OrderStatus.COMPLETE)
        now = datetime.now(UTC)
        self._move_to(OrderStatus.COMPLETE, now)
        self.completed_at = now

        self.raise_(
            OrderCompleted(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                order_number=self.order_number,
                items=json.dumps(self.review_items()),
                completed_at=now,
            )
        )

    def advance_to(self, target_status, tracking_number=None):
        """Apply an inbound fulfillment status, which must be the next step.

        Skipping ahead (e.g. pending → complete) or moving backwards is
        rejected, as is using this path to cancel.
        """
        target = parse_status(target_status)
        current = self.current_status
        expected = _NEXT_FULFILLMENT_STATUS.get(current)
        if target != expected:
            raise InvalidState(f"Cannot move order {self.order_number} from {current.value} to {target.value}")

        if target == OrderStatus.APPROVED:
            self.approve()
        elif target == OrderStatus.IN_TRANSIT:
            self.dispatch(tracking_number=tracking_number)
        else:
            self.complete()

    # -------------------------------------------------------------------
    # Cancellation
    # -------------------------------------------------------------------
    def cancel(self, reason):
        """Cancel a pending order on the customer's request. Irreversible."""
        if self.current_status != OrderStatus.PENDING:
            raise InvalidState(
                f"Order {self.order_number} is {self.current_status.value} and can no longer be cancelled"
            )
        if not reason or not reason.strip():
            raise MissingReason()

        now = datetime.now(UTC)
        self._move_to(OrderStatus.CANCELLED, now)
        self.cancellation_reason = reason.strip()
        self.cancelled_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                reason=self.cancellation_reason,
                cancelled_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Shipping fee confirmation & staff notes
    # -------------------------------------------------------------------
    def confirm_shipping_fee(self):
        """Record the customer's acceptance of the quoted shipping fee.

        Only pending orders with a non-zero fee need confirmation. Confirming
        twice is a no-op.
        """
        if self.current_status != OrderStatus.PENDING:
            raise InvalidState(f"Order {self.order_number} is no longer pending")
        if not self.shipping_fee or self.shipping_fee <= 0:
            raise ValidationError({"shipping_fee": ["Shipping fee is not set for this order"]})
        if self.shipping_fee_confirmed:
            return

        now = datetime.now(UTC)
        self.shipping_fee_confirmed = True
        self.updated_at = now

        self.raise_(
            ShippingFeeConfirmed(
                order_id=str(self.id),
                shipping_fee=self.shipping_fee,
                confirmed_at=now,
            )
        )

    def add_admin_note(self, note):
        if not note or not note.strip():
            raise ValidationError({"note": ["Note cannot be empty"]})

        now = datetime.now(UTC)
        entry = f"[{now.isoformat(timespec='seconds')}] {note.strip()}"
        self.admin_notes = f"{self.admin_notes}\n{entry}" if self.admin_notes else entry
        self.updated_at = now

        self.raise_(AdminNoteAdded(order_id=str(self.id), note=note.strip(), added_at=now))
