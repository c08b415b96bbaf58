"""Checkout orchestration: turns a customer's cart into a pending order.

Flow:
    1. Validate contact, address, phone, payment method and cart, in that
       order, before anything is written.
    2. Price the cart: line snapshots, discounts and the shipping fee.
    3. Process ``PlaceOrder``. A failure here leaves the cart untouched.
    4. Only once the order exists, process ``ClearCart``.

Retrying with the same ``checkout_key`` returns the order the first attempt
created instead of placing a second one.
"""

import json
from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain
from shared.errors import (
    EmptyCart,
    IncompleteAddress,
    IncompleteContact,
    MissingPaymentMethod,
    MissingPhone,
)

from ordering.cart.cart import ShoppingCart
from ordering.cart.items import ClearCart
from ordering.order.creation import PlaceOrder
from ordering.order.locking import checkout_lock
from ordering.order.order import DeliveryMethod, Order, PaymentMethod
from ordering.pricing import compute_line_discount, compute_total, shipping_fee_for

logger = structlog.get_logger(__name__)

SUPPORTED_PAYMENT_METHODS = frozenset(method.value for method in PaymentMethod)

STORE_PICKUP_ADDRESS = {
    "address_line": "Store Pickup Counter",
    "barangay": "",
    "city": "San Pablo City",
    "province": "Laguna",
    "postal_code": "4000",
}
PICKUP_NOTE = "PICKUP ORDER - Customer will collect from store. Payment: Cash on Pickup"


@dataclass(frozen=True)
class ContactInfo:
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True)
class ShippingInfo:
    phone: str | None = None
    address_line: str | None = None
    barangay: str | None = None
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None
    recipient_name: str | None = None


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def validate_checkout(contact, shipping, payment_method, cart, delivery_method=DeliveryMethod.SHIPPING.value):
    """Raise the first failing checkout rule, or return None.

    Pickup orders are collected at the store, so the address rule does not
    apply to them; the phone number is still required.
    """
    if _blank(contact.email) or _blank(contact.first_name) or _blank(contact.last_name):
        raise IncompleteContact()

    if delivery_method != DeliveryMethod.PICKUP.value:
        if _blank(shipping.address_line) or _blank(shipping.city) or _blank(shipping.province):
            raise IncompleteAddress()

    if _blank(shipping.phone):
        raise MissingPhone()

    if payment_method not in SUPPORTED_PAYMENT_METHODS:
        raise MissingPaymentMethod()

    if cart is None or cart.total_items <= 0:
        raise EmptyCart()


def _line_snapshots(cart):
    return [
        {
            "product_id": str(item.product_id),
            "name": item.name,
            "image": item.image,
            "unit_price": item.unit_price,
            "discount": compute_line_discount(item.unit_price, item.original_unit_price, item.quantity),
            "quantity": item.quantity,
        }
        for item in cart.items
    ]


def _address_for(contact, shipping, delivery_method):
    recipient_name = (shipping.recipient_name or "").strip() or f"{contact.first_name} {contact.last_name}".strip()
    if delivery_method == DeliveryMethod.PICKUP.value:
        return {"recipient_name": recipient_name, "phone": shipping.phone.strip(), **STORE_PICKUP_ADDRESS}

    return {
        "recipient_name": recipient_name,
        "phone": shipping.phone.strip(),
        "address_line": shipping.address_line.strip(),
        "barangay": (shipping.barangay or "").strip(),
        "city": shipping.city.strip(),
        "province": shipping.province.strip(),
        "postal_code": (shipping.postal_code or "").strip(),
    }


def submit_checkout(
    customer_id,
    contact: ContactInfo,
    shipping: ShippingInfo,
    payment_method,
    delivery_method=DeliveryMethod.SHIPPING.value,
    customer_notes=None,
    checkout_key=None,
) -> dict:
    """Place an order from the customer's cart and empty the cart.

    Returns ``{"order_id", "order_number", "grand_total"}``.
    """
    delivery_method = delivery_method or DeliveryMethod.SHIPPING.value
    if delivery_method == DeliveryMethod.PICKUP.value:
        payment_method = PaymentMethod.CASH_ON_DELIVERY.value
        customer_notes = f"{PICKUP_NOTE}\n{customer_notes}" if customer_notes else PICKUP_NOTE

    with checkout_lock(customer_id):
        cart = current_domain.repository_for(ShoppingCart).find_for_customer(customer_id)
        order_repo = current_domain.repository_for(Order)

        existing = order_repo.find_by_checkout_key(customer_id, checkout_key)
        if existing is not None:
            logger.info("Checkout retried", order_id=str(existing.id), checkout_key=checkout_key)
            return _receipt(existing)

        validate_checkout(contact, shipping, payment_method, cart, delivery_method=delivery_method)

        subtotal = cart.total_price
        shipping_fee = shipping_fee_for(subtotal, delivery_method)
        logger.info(
            "Submitting checkout",
            customer_id=str(customer_id),
            subtotal=subtotal,
            shipping_fee=shipping_fee,
            total=compute_total(subtotal, shipping_fee),
        )

        order_id = current_domain.process(
            PlaceOrder(
                customer_id=customer_id,
                items=json.dumps(_line_snapshots(cart)),
                shipping_address=json.dumps(_address_for(contact, shipping, delivery_method)),
                payment_method=payment_method,
                delivery_method=delivery_method,
                shipping_fee=shipping_fee,
                customer_notes=customer_notes,
                checkout_key=checkout_key,
            ),
            asynchronous=False,
        )

        try:
            current_domain.process(ClearCart(customer_id=customer_id), asynchronous=False)
        except Exception:
            # The order stands; a retry with the same key will not duplicate it
            logger.exception("Order placed but cart could not be cleared", order_id=order_id)

        return _receipt(order_repo.get(order_id))


def _receipt(order):
    return {
        "order_id": str(order.id),
        "order_number": order.order_number,
        "grand_total": order.grand_total,
    }
