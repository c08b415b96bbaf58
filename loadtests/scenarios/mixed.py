"""Mixed storefront workload scenarios.

``StorefrontUser`` combines the storefront journeys with weights that model
realistic traffic. ``CheckoutRushUser`` hammers checkout and fulfillment so
the per-order serialization is exercised under contention.
"""

from locust import HttpUser, between

from loadtests.scenarios.storefront import (
    CartBrowsingJourney,
    CheckoutAndCancelJourney,
    FulfillmentAndReviewJourney,
)


class StorefrontUser(HttpUser):
    """Realistic mixed workload.

    - Cart browsing: most common, no purchase
    - Fulfillment and review: the happy path
    - Checkout and cancel: the unhappy path
    """

    tasks = {
        CartBrowsingJourney: 5,
        FulfillmentAndReviewJourney: 3,
        CheckoutAndCancelJourney: 2,
    }
    wait_time = between(1, 3)


class CheckoutRushUser(HttpUser):
    """Checkout-heavy burst with no think time."""

    tasks = {
        FulfillmentAndReviewJourney: 1,
        CheckoutAndCancelJourney: 1,
    }
    wait_time = between(0, 0.2)
