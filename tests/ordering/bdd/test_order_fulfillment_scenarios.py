"""BDD tests for fulfillment progression."""

from ordering.order.fulfillment import AdvanceOrderStatus
from ordering.order.locking import process_serialized
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when
from shared.errors import DomainError

scenarios("features/order_fulfillment.feature")


def reload_order(order_id):
    return current_domain.repository_for(Order).get(order_id)


@when(parsers.cfparse('the order status is advanced to "{status}"'))
def _(order_id, status, error):
    try:
        process_serialized(AdvanceOrderStatus(order_id=order_id, status=status))
    except DomainError as exc:
        error["exc"] = exc


@then(parsers.cfparse("the order revision is {revision:d}"))
def _(order_id, revision):
    assert reload_order(order_id).revision == revision
