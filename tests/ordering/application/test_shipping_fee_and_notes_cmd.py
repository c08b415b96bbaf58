"""Application tests for shipping fee confirmation and staff notes."""

import pytest
from ordering.order.cancellation import CancelOrder
from ordering.order.notes import AddAdminNote
from ordering.order.order import Order
from ordering.order.shipping_fee import ConfirmShippingFee
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.errors import InvalidState


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


def _confirm(order_id, customer_id="cust-001"):
    current_domain.process(ConfirmShippingFee(order_id=order_id, customer_id=customer_id), asynchronous=False)


class TestConfirmShippingFee:
    def test_confirm_fee(self, place_order):
        order_id = place_order(shipping_fee=100.0)

        _confirm(order_id)

        order = _order(order_id)
        assert order.shipping_fee_confirmed is True
        assert order.revision == 0

    def test_confirming_twice_is_harmless(self, place_order):
        order_id = place_order()
        _confirm(order_id)
        _confirm(order_id)
        assert _order(order_id).shipping_fee_confirmed is True

    def test_free_shipping_has_nothing_to_confirm(self, place_order):
        order_id = place_order(shipping_fee=0.0)
        with pytest.raises(ValidationError):
            _confirm(order_id)

    def test_only_pending_orders(self, place_order):
        order_id = place_order()
        current_domain.process(
            CancelOrder(order_id=order_id, customer_id="cust-001", reason="Found it cheaper"),
            asynchronous=False,
        )
        with pytest.raises(InvalidState):
            _confirm(order_id)

    def test_other_customer_gets_not_found(self, place_order):
        order_id = place_order()
        with pytest.raises(ObjectNotFoundError):
            _confirm(order_id, customer_id="cust-002")


class TestAdminNotes:
    def test_notes_are_appended(self, place_order):
        order_id = place_order()

        current_domain.process(AddAdminNote(order_id=order_id, note="Called customer"), asynchronous=False)
        current_domain.process(AddAdminNote(order_id=order_id, note="Rider assigned"), asynchronous=False)

        lines = _order(order_id).admin_notes.splitlines()
        assert len(lines) == 2
        assert lines[0].endswith("] Called customer")
        assert lines[1].endswith("] Rider assigned")

    def test_blank_note_rejected(self, place_order):
        order_id = place_order()
        with pytest.raises(ValidationError):
            current_domain.process(AddAdminNote(order_id=order_id, note="   "), asynchronous=False)
