"""Application tests for order read helpers."""

from datetime import UTC, datetime, timedelta

import pytest
from ordering.order.fulfillment import ApproveOrder, DispatchOrder
from ordering.order.listing import get_order, list_orders
from ordering.order.locking import process_serialized
from ordering.order.order import Order
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from shared.errors import InvalidStatusValue


def _store_legacy_delivering(order_id):
    repo = current_domain.repository_for(Order)
    order = repo.get(order_id)
    order.status = "delivering"
    repo.add(order)


class TestGetOrder:
    def test_snapshot_contents(self, place_order):
        order_id = place_order()

        snapshot = get_order(order_id, customer_id="cust-001")

        assert snapshot["status"] == "pending"
        assert snapshot["total_amount"] == 3000.0
        assert snapshot["shipping_fee"] == 100.0
        assert snapshot["grand_total"] == 3100.0
        assert snapshot["items"][0]["line_total"] == 3000.0
        assert snapshot["shipping_address"]["full_address"] == (
            "123 Rizal St, San Roque, San Pablo City, Laguna, 4000"
        )

    def test_other_customer_gets_not_found(self, place_order):
        order_id = place_order(customer_id="cust-001")
        with pytest.raises(ObjectNotFoundError):
            get_order(order_id, customer_id="cust-002")

    def test_legacy_status_reported_as_in_transit(self, place_order):
        order_id = place_order()
        _store_legacy_delivering(order_id)

        assert get_order(order_id)["status"] == "in_transit"


class TestListOrders:
    def test_only_own_orders(self, place_order):
        place_order(customer_id="cust-001")
        place_order(customer_id="cust-002")

        orders = list_orders("cust-001")

        assert len(orders) == 1
        assert orders[0]["customer_id"] == "cust-001"

    def test_newest_first(self, place_order):
        first = place_order()
        second = place_order()
        repo = current_domain.repository_for(Order)
        older = repo.get(first)
        older.created_at = datetime.now(UTC) - timedelta(days=1)
        repo.add(older)

        orders = list_orders("cust-001")

        assert [o["order_id"] for o in orders] == [second, first]

    def test_pagination(self, place_order):
        for _ in range(5):
            place_order()

        assert len(list_orders("cust-001", limit=2)) == 2
        assert len(list_orders("cust-001", limit=2, offset=4)) == 1

    def test_status_filter(self, place_order):
        pending = place_order()
        approved = place_order()
        process_serialized(ApproveOrder(order_id=approved))

        assert [o["order_id"] for o in list_orders("cust-001", status="pending")] == [pending]
        assert [o["order_id"] for o in list_orders("cust-001", status="APPROVED")] == [approved]

    def test_unknown_status_filter_rejected(self, place_order):
        place_order()

        with pytest.raises(InvalidStatusValue):
            list_orders("cust-001", status="shipped")

    def test_in_transit_filter_includes_legacy_rows(self, place_order):
        modern = place_order()
        process_serialized(ApproveOrder(order_id=modern))
        process_serialized(DispatchOrder(order_id=modern))
        legacy = place_order()
        _store_legacy_delivering(legacy)
        place_order()

        orders = list_orders("cust-001", status="in_transit")

        assert sorted(o["order_id"] for o in orders) == sorted([modern, legacy])
        assert {o["status"] for o in orders} == {"in_transit"}
