"""Per-order serialization of state-changing commands.

Commands are processed in their own unit of work, which commits after the
handler returns. The lock therefore wraps the whole ``process`` call so two
writers targeting the same order can never interleave their load and commit.
"""

import threading
import weakref
from contextlib import contextmanager

from protean.utils.globals import current_domain

_registry_lock = threading.Lock()

# Entries live only while some caller holds or waits on the lock
_order_locks = weakref.WeakValueDictionary()


def _lock_for(key):
    key = str(key)
    with _registry_lock:
        lock = _order_locks.get(key)
        if lock is None:
            lock = _order_locks[key] = threading.RLock()
        return lock


@contextmanager
def order_lock(order_id):
    lock = _lock_for(order_id)
    with lock:
        yield


def process_serialized(command):
    """Process an order command while holding that order's lock."""
    with order_lock(command.order_id):
        return current_domain.process(command, asynchronous=False)


@contextmanager
def checkout_lock(customer_id):
    """Serialize checkouts of one customer so a checkout key is used at most once."""
    lock = _lock_for(f"checkout:{customer_id}")
    with lock:
        yield
