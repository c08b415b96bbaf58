"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the checkout rules (contact,
address, phone, payment method) and match the exact field names expected by
the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_PH")

# Product ids stocked by the app's demo catalogue
DEMO_PRODUCT_IDS = ["LMP-1001", "LMP-1002", "LMP-1003", "LMP-1004", "LMP-1005"]

PAYMENT_METHODS = ["gcash", "maya", "cash_on_delivery"]


def shopper_headers(customer_id: str | None = None) -> dict[str, str]:
    """Identity headers the upstream gateway would forward for a signed-in shopper."""
    customer_id = customer_id or f"cust-lt-{uuid.uuid4().hex[:8]}"
    return {
        "X-Customer-Id": customer_id,
        "X-Customer-Email": f"{customer_id}@{fake.free_email_domain()}",
        "X-Customer-First-Name": fake.first_name()[:100],
        "X-Customer-Last-Name": fake.last_name()[:100],
    }


def mobile_number() -> str:
    """Generate an 11-digit mobile number such as 09171234567."""
    return f"09{random.randint(100000000, 999999999)}"


def cart_item_data() -> dict:
    """Generate AddToCartRequest payload."""
    return {"product_id": random.choice(DEMO_PRODUCT_IDS), "quantity": random.randint(1, 3)}


def checkout_data(headers: dict[str, str], delivery_method: str = "shipping") -> dict:
    """Generate CheckoutRequest payload for the shopper behind ``headers``."""
    return {
        "contact": {
            "email": headers["X-Customer-Email"],
            "first_name": headers["X-Customer-First-Name"],
            "last_name": headers["X-Customer-Last-Name"],
        },
        "shipping": {
            "phone": mobile_number(),
            "address_line": fake.street_address()[:255],
            "barangay": f"Barangay {random.randint(1, 80)}",
            "city": fake.city()[:100],
            "province": fake.province()[:100],
            "postal_code": fake.postcode()[:20],
        },
        "payment_method": random.choice(PAYMENT_METHODS),
        "delivery_method": delivery_method,
        "customer_notes": fake.sentence() if random.random() < 0.3 else None,
        "checkout_key": f"chk-{uuid.uuid4().hex[:12]}",
    }


def cancellation_reason() -> str:
    return random.choice(
        [
            "Changed my mind",
            "Ordered the wrong size",
            "Found a better price",
            "Delivery takes too long",
        ]
    )


def tracking_number() -> str:
    return f"{random.choice(['LBC', 'JNT', 'NV'])}-{uuid.uuid4().hex[:10].upper()}"


def review_data(order_id: str) -> dict:
    """Generate SubmitReviewRequest payload covering every order line.

    The reviewer is whoever the X-Customer-* headers name.
    """
    return {
        "order_id": order_id,
        "rating": random.randint(1, 5),
        "comment": fake.paragraph(nb_sentences=2),
    }
