"""Read helpers for presenting orders to customers and staff.

Status values are normalized here, so legacy spellings never leak out of the
ordering domain.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.order.order import Order


def order_snapshot(order: Order) -> dict:
    address = order.shipping_address
    return {
        "order_id": str(order.id),
        "order_number": order.order_number,
        "customer_id": str(order.customer_id),
        "status": order.current_status.value,
        "revision": order.revision,
        "items": [
            {
                "product_id": str(item.product_id),
                "name": item.name,
                "image": item.image,
                "unit_price": item.unit_price,
                "original_unit_price": item.original_unit_price,
                "discount": item.discount or 0.0,
                "quantity": item.quantity,
                "line_total": item.line_total,
            }
            for item in order.items
        ],
        "shipping_address": {
            "recipient_name": address.recipient_name,
            "phone": address.phone,
            "address_line": address.address_line,
            "barangay": address.barangay,
            "city": address.city,
            "province": address.province,
            "postal_code": address.postal_code,
            "full_address": address.full_address,
        }
        if address
        else None,
        "payment_method": order.payment_method,
        "delivery_method": order.delivery_method,
        "total_amount": order.total_amount,
        "shipping_fee": order.shipping_fee or 0.0,
        "shipping_fee_confirmed": bool(order.shipping_fee_confirmed),
        "grand_total": order.grand_total,
        "tracking_number": order.tracking_number,
        "customer_notes": order.customer_notes,
        "cancellation_reason": order.cancellation_reason,
        "created_at": order.created_at,
        "completed_at": order.completed_at,
    }


def get_order(order_id, customer_id=None) -> dict:
    """Fetch one order; with ``customer_id`` set, only that customer's order."""
    order = current_domain.repository_for(Order).get(order_id)
    if customer_id is not None and str(order.customer_id) != str(customer_id):
        raise ObjectNotFoundError(f"Order with identifier {order_id} does not exist")
    return order_snapshot(order)


def list_orders(customer_id, status=None, limit=20, offset=0) -> list[dict]:
    orders = current_domain.repository_for(Order).list_for_customer(
        customer_id, status=status, limit=limit, offset=offset
    )
    return [order_snapshot(order) for order in orders]
