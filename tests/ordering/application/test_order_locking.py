"""Application tests for the per-order lock registry."""

import gc
import threading

from ordering.order import locking
from ordering.order.fulfillment import ApproveOrder
from ordering.order.locking import checkout_lock, order_lock, process_serialized


class TestLockRegistry:
    def test_same_order_shares_one_lock_while_held(self):
        with order_lock("order-1"):
            assert locking._lock_for("order-1") is locking._lock_for("order-1")
            assert locking._lock_for("order-1") is not locking._lock_for("order-2")

    def test_lock_is_reentrant(self):
        with order_lock("order-1"):
            with order_lock("order-1"):
                pass

    def test_entry_dropped_after_command(self, place_order):
        order_id = place_order()

        process_serialized(ApproveOrder(order_id=order_id))
        gc.collect()

        assert str(order_id) not in locking._order_locks

    def test_checkout_entry_dropped_after_use(self):
        with checkout_lock("cust-001"):
            assert "checkout:cust-001" in locking._order_locks
        gc.collect()

        assert "checkout:cust-001" not in locking._order_locks

    def test_waiter_gets_the_lock_held_by_another_thread(self):
        acquired = threading.Event()
        release = threading.Event()
        seen = {}

        def _holder():
            with order_lock("order-9"):
                seen["holder"] = locking._lock_for("order-9")
                acquired.set()
                release.wait(timeout=5)

        thread = threading.Thread(target=_holder)
        thread.start()
        acquired.wait(timeout=5)
        seen["waiter"] = locking._lock_for("order-9")
        release.set()
        thread.join(timeout=5)

        assert seen["waiter"] is seen["holder"]
