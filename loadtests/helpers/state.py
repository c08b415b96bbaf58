"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state: no cross-user sharing.
State tracks the shopper's identity headers and the ids returned by the API
so follow-up requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks one simulated shopper from cart to review."""

    headers: dict[str, str] = field(default_factory=dict)
    customer_id: str | None = None
    cart_lines: int = 0
    order_id: str | None = None
    order_number: str | None = None
    current_status: str | None = None
    revision: int = 0
    review_id: str | None = None
