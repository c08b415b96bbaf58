"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus, parse_status

# Persisted spellings that map onto each status, legacy values included
_STORED_STATUS_VALUES = {
    OrderStatus.IN_TRANSIT: ["in_transit", "delivering"],
}


@ordering.repository(part_of=Order)
class OrderRepository:
    def find_by_checkout_key(self, customer_id, checkout_key) -> Order | None:
        """Return the order already placed for this checkout attempt, if any."""
        if not checkout_key:
            return None
        orders = self._dao.query.filter(customer_id=str(customer_id), checkout_key=checkout_key).all()
        return orders.items[0] if orders.items else None

    def list_for_customer(self, customer_id, status=None, limit=20, offset=0) -> list[Order]:
        """Return a customer's orders, newest first.

        ``status`` may be given in any accepted spelling; filtering on
        ``in_transit`` also matches orders stored as ``delivering``.
        """
        query = self._dao.query.filter(customer_id=str(customer_id))
        if status:
            target = parse_status(status)
            query = query.filter(status__in=_STORED_STATUS_VALUES.get(target, [target.value]))
        return query.order_by("-created_at").offset(offset).limit(limit).all().items
