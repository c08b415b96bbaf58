"""Order placement: command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import DeliveryMethod, Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of line snapshot dicts
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(required=True, max_length=30)
    delivery_method = String(max_length=20, default=DeliveryMethod.SHIPPING.value)
    shipping_fee = Float(default=0.0)
    customer_notes = Text()
    checkout_key = String(max_length=100)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        repo = current_domain.repository_for(Order)

        existing = repo.find_by_checkout_key(command.customer_id, command.checkout_key)
        if existing is not None:
            logger.info(
                "Checkout key already used, returning existing order",
                order_id=str(existing.id),
                checkout_key=command.checkout_key,
            )
            return str(existing.id)

        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        shipping_address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )

        order = Order.place(
            customer_id=command.customer_id,
            items_data=items_data,
            shipping_address=shipping_address,
            payment_method=command.payment_method,
            shipping_fee=command.shipping_fee or 0.0,
            delivery_method=command.delivery_method or DeliveryMethod.SHIPPING.value,
            customer_notes=command.customer_notes,
            checkout_key=command.checkout_key,
        )
        repo.add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=str(command.customer_id),
        )
        return str(order.id)
