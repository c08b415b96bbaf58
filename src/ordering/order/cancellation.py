"""Customer cancellation: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = String(max_length=500)  # Checked by the aggregate after the state
    expected_revision = Integer()


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if str(order.customer_id) != str(command.customer_id):
            # Other customers' orders are indistinguishable from missing ones
            raise ObjectNotFoundError(f"Order with identifier {command.order_id} does not exist")

        order.assert_revision(command.expected_revision)
        order.cancel(reason=command.reason)
        repo.add(order)

        logger.info("Order cancelled by customer", order_id=str(order.id), revision=order.revision)
