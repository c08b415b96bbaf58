"""BDD tests for customer cancellation."""

from ordering.order.cancellation import CancelOrder
from ordering.order.locking import process_serialized
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when
from shared.errors import DomainError

scenarios("features/order_cancellation.feature")


def reload_order(order_id):
    return current_domain.repository_for(Order).get(order_id)


@when(parsers.cfparse('the customer cancels the order with reason "{reason}"'))
def _(order_id, shopper, reason, error):
    try:
        process_serialized(CancelOrder(order_id=order_id, customer_id=shopper["customer_id"], reason=reason))
    except DomainError as exc:
        error["exc"] = exc


@then(parsers.cfparse('the cancellation reason is "{reason}"'))
def _(order_id, reason):
    assert reload_order(order_id).cancellation_reason == reason


@when("the customer cancels the order without a reason")
def _(order_id, shopper, error):
    try:
        process_serialized(CancelOrder(order_id=order_id, customer_id=shopper["customer_id"], reason=None))
    except DomainError as exc:
        error["exc"] = exc
