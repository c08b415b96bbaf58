"""Shipping fee confirmation: command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class ConfirmShippingFee:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class ConfirmShippingFeeHandler:
    @handle(ConfirmShippingFee)
    def confirm_shipping_fee(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if str(order.customer_id) != str(command.customer_id):
            raise ObjectNotFoundError(f"Order with identifier {command.order_id} does not exist")
        order.confirm_shipping_fee()
        repo.add(order)
