"""Fulfillment status transitions: commands and handler.

Staff (or the fulfillment integration) advance an order one step at a time:
pending → approved → in_transit → complete.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class ApproveOrder:
    order_id = Identifier(required=True)
    expected_revision = Integer()


@ordering.command(part_of="Order")
class DispatchOrder:
    order_id = Identifier(required=True)
    tracking_number = String(max_length=255)
    expected_revision = Integer()


@ordering.command(part_of="Order")
class CompleteOrder:
    order_id = Identifier(required=True)
    expected_revision = Integer()


@ordering.command(part_of="Order")
class AdvanceOrderStatus:
    """Apply an inbound status value, e.g. from a fulfillment webhook."""

    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    tracking_number = String(max_length=255)
    expected_revision = Integer()


@ordering.command_handler(part_of=Order)
class OrderFulfillmentHandler:
    def _load(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.assert_revision(command.expected_revision)
        return repo, order

    def _save(self, repo, order):
        repo.add(order)
        logger.info(
            "Order status changed",
            order_id=str(order.id),
            status=order.status,
            revision=order.revision,
        )
        return order.status

    @handle(ApproveOrder)
    def approve_order(self, command):
        repo, order = self._load(command)
        order.approve()
        return self._save(repo, order)

    @handle(DispatchOrder)
    def dispatch_order(self, command):
        repo, order = self._load(command)
        order.dispatch(tracking_number=command.tracking_number)
        return self._save(repo, order)

    @handle(CompleteOrder)
    def complete_order(self, command):
        repo, order = self._load(command)
        order.complete()
        return self._save(repo, order)

    @handle(AdvanceOrderStatus)
    def advance_order_status(self, command):
        repo, order = self._load(command)
        order.advance_to(command.status, tracking_number=command.tracking_number)
        return self._save(repo, order)
