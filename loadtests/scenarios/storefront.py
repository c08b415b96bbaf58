"""Storefront load test scenarios.

Three stateful SequentialTaskSet journeys: a shopper who checks out and
then cancels, a full fulfillment run that ends in a review, and a browsing
shopper who fiddles with their cart without buying.
"""

import random

from locust import SequentialTaskSet, task

from loadtests.data_generators import (
    DEMO_PRODUCT_IDS,
    cancellation_reason,
    cart_item_data,
    checkout_data,
    review_data,
    shopper_headers,
    tracking_number,
)
from loadtests.helpers.response import error_code, extract_error_detail
from loadtests.helpers.state import ShopperState


class ShopperJourney(SequentialTaskSet):
    """Shared steps: fill the cart, then check out."""

    def on_start(self):
        headers = shopper_headers()
        self.state = ShopperState(headers=headers, customer_id=headers["X-Customer-Id"])

    def fill_cart(self, lines=2):
        for _ in range(lines):
            with self.client.post(
                "/cart/items",
                json=cart_item_data(),
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_lines = len(resp.json()["items"])
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code}: {extract_error_detail(resp)}")
                    self.interrupt()

    def checkout(self):
        payload = checkout_data(self.state.headers, delivery_method=random.choice(["shipping", "shipping", "pickup"]))
        with self.client.post(
            "/checkout",
            json=payload,
            headers=self.state.headers,
            catch_response=True,
            name="POST /checkout",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.order_id = body["order_id"]
                self.state.order_number = body["order_number"]
                self.state.current_status = "pending"
            else:
                resp.failure(f"Checkout failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    def advance(self, action, json=None):
        with self.client.put(
            f"/orders/{self.state.order_id}/{action}",
            json=json,
            catch_response=True,
            name=f"PUT /orders/{{id}}/{action}",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = resp.json()["status"]
                self.state.revision += 1
            else:
                resp.failure(f"{action} failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()


class CheckoutAndCancelJourney(ShopperJourney):
    """Add Items -> Checkout -> View Order -> Cancel -> Cancel again (409).

    The unhappy path: the shopper changes their mind while the order is
    still pending. The repeated cancel must be refused as a state conflict.
    """

    @task
    def add_items(self):
        self.fill_cart(lines=random.randint(1, 3))

    @task
    def place_order(self):
        self.checkout()

    @task
    def view_order(self):
        with self.client.get(
            f"/orders/{self.state.order_id}",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders/{id}",
        ) as resp:
            if resp.status_code != 200 or resp.json()["status"] != "pending":
                resp.failure(f"View order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def cancel(self):
        with self.client.post(
            f"/orders/{self.state.order_id}/cancel",
            json={"reason": cancellation_reason(), "expected_revision": self.state.revision},
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders/{id}/cancel",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "cancelled"
            else:
                resp.failure(f"Cancel failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def cancel_again(self):
        with self.client.post(
            f"/orders/{self.state.order_id}/cancel",
            json={"reason": "Twice"},
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders/{id}/cancel (repeat)",
        ) as resp:
            if resp.status_code == 409 and error_code(resp) == "invalid_state":
                resp.success()
            else:
                resp.failure(f"Repeat cancel not refused: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class FulfillmentAndReviewJourney(ShopperJourney):
    """Add Items -> Checkout -> Approve -> Dispatch -> Complete -> Review.

    The happy path through the order status engine. Reviews only open once
    the completion has reached the Reviews domain, which happens
    asynchronously when the Engine is running, so an early
    ``order_not_complete`` is counted as expected.
    """

    @task
    def add_items(self):
        self.fill_cart(lines=2)

    @task
    def place_order(self):
        self.checkout()

    @task
    def approve(self):
        self.advance("approve")

    @task
    def dispatch(self):
        self.advance("dispatch", json={"tracking_number": tracking_number()})

    @task
    def complete(self):
        self.advance("complete", json={"expected_revision": self.state.revision})

    @task
    def review(self):
        with self.client.post(
            "/reviews",
            json=review_data(self.state.order_id),
            headers=self.state.headers,
            catch_response=True,
            name="POST /reviews",
        ) as resp:
            if resp.status_code == 201:
                self.state.review_id = resp.json()["review_id"]
            elif resp.status_code == 409 and error_code(resp) == "order_not_complete":
                resp.success()
            else:
                resp.failure(f"Review failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def check_reviewed(self):
        with self.client.get(
            f"/reviews/orders/{self.state.order_id}",
            catch_response=True,
            name="GET /reviews/orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Review status failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CartBrowsingJourney(ShopperJourney):
    """Add Items -> Update Quantity -> Remove Item -> View Cart.

    Models a browsing shopper who never checks out.
    """

    @task
    def add_items(self):
        self.fill_cart(lines=3)

    @task
    def update_quantity(self):
        product_id = random.choice(DEMO_PRODUCT_IDS)
        with self.client.put(
            f"/cart/items/{product_id}",
            json={"quantity": random.randint(1, 5)},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /cart/items/{id}",
        ) as resp:
            # Products not in the cart are refused; both outcomes are valid traffic
            if resp.status_code in (200, 400):
                resp.success()

    @task
    def view_cart(self):
        with self.client.get(
            "/cart",
            headers=self.state.headers,
            catch_response=True,
            name="GET /cart",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View cart failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()
