"""Tests for the pricing calculator."""

import pytest
from ordering.pricing import (
    FLAT_SHIPPING_FEE,
    FREE_SHIPPING_THRESHOLD,
    compute_line_discount,
    compute_shipping_fee,
    compute_total,
    shipping_fee_for,
)


class TestShippingFee:
    @pytest.mark.parametrize(
        "subtotal, expected",
        [
            (0.0, 100.0),
            (3000.0, 100.0),
            (9999.99, 100.0),
            (10000.0, 0.0),
            (10000.01, 0.0),
            (15000.0, 0.0),
        ],
    )
    def test_threshold_is_inclusive(self, subtotal, expected):
        assert compute_shipping_fee(subtotal) == expected

    def test_defaults(self):
        assert FREE_SHIPPING_THRESHOLD == 10000.0
        assert FLAT_SHIPPING_FEE == 100.0

    def test_custom_threshold_and_fee(self):
        assert compute_shipping_fee(499.0, free_threshold=500, flat_fee=45) == 45.0
        assert compute_shipping_fee(500.0, free_threshold=500, flat_fee=45) == 0.0

    def test_pickup_never_pays_shipping(self):
        assert shipping_fee_for(3000.0, "pickup") == 0.0

    def test_shipping_delivery_uses_threshold(self):
        assert shipping_fee_for(3000.0, "shipping") == 100.0
        assert shipping_fee_for(12000.0, "shipping") == 0.0


class TestTotals:
    def test_total_adds_shipping_fee(self):
        assert compute_total(3000.0, 100.0) == 3100.0

    def test_total_rounds_to_cents(self):
        assert compute_total(0.1 + 0.2, 0.0) == 0.3


class TestLineDiscount:
    def test_discount_is_difference_times_quantity(self):
        assert compute_line_discount(1000.0, 1250.0, 2) == 500.0

    def test_no_original_price_means_no_discount(self):
        assert compute_line_discount(1000.0, None, 2) == 0.0

    def test_original_not_higher_means_no_discount(self):
        assert compute_line_discount(1000.0, 900.0, 3) == 0.0
