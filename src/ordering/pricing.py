"""Pricing calculator: shipping fee and order totals.

Pure functions with no dependencies on aggregates or repositories. Amounts are
plain floats (the same representation used by every monetary field in the
domain) rounded to two decimal places.
"""

FREE_SHIPPING_THRESHOLD = 10000.0
FLAT_SHIPPING_FEE = 100.0

DELIVERY_SHIPPING = "shipping"
DELIVERY_PICKUP = "pickup"


def _money(amount):
    return round(float(amount), 2)


def compute_shipping_fee(subtotal, free_threshold=FREE_SHIPPING_THRESHOLD, flat_fee=FLAT_SHIPPING_FEE):
    """Return the shipping fee for an items subtotal.

    Shipping is free when the subtotal reaches the threshold (inclusive),
    otherwise the flat fee applies.
    """
    if subtotal >= free_threshold:
        return 0.0
    return _money(flat_fee)


def shipping_fee_for(subtotal, delivery_method=DELIVERY_SHIPPING):
    """Shipping fee for a checkout, taking the delivery method into account.

    In-store pickup never pays shipping.
    """
    if delivery_method == DELIVERY_PICKUP:
        return 0.0
    return compute_shipping_fee(subtotal)


def compute_total(subtotal, shipping_fee):
    return _money(subtotal + shipping_fee)


def compute_line_discount(unit_price, original_unit_price, quantity):
    """Total amount deducted on a line versus the catalogue's original price."""
    if original_unit_price is None or original_unit_price <= unit_price:
        return 0.0
    return _money((original_unit_price - unit_price) * quantity)
