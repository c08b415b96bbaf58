"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer): separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1  # Range enforced by the cart, so errors carry its code


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartItemSchema(BaseModel):
    product_id: str
    name: str
    image: str | None = None
    unit_price: float
    original_unit_price: float | None = None
    quantity: int
    line_total: float


class CartResponse(BaseModel):
    customer_id: str
    items: list[CartItemSchema] = []
    total_items: int = 0
    total_price: float = 0.0
    shipping_fee: float = 0.0
    grand_total: float = 0.0


# ---------------------------------------------------------------------------
# Checkout Schemas
# ---------------------------------------------------------------------------
class ContactSchema(BaseModel):
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class ShippingSchema(BaseModel):
    recipient_name: str | None = None
    phone: str | None = None
    address_line: str | None = None
    barangay: str | None = None
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None


class CheckoutRequest(BaseModel):
    contact: ContactSchema
    shipping: ShippingSchema
    payment_method: str | None = None
    delivery_method: str = "shipping"
    customer_notes: str | None = None
    checkout_key: str | None = Field(default=None, max_length=100)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "contact": {
                        "email": "juan@example.com",
                        "first_name": "Juan",
                        "last_name": "Dela Cruz",
                    },
                    "shipping": {
                        "phone": "09171234567",
                        "address_line": "123 Rizal St",
                        "barangay": "San Roque",
                        "city": "San Pablo City",
                        "province": "Laguna",
                        "postal_code": "4000",
                    },
                    "payment_method": "gcash",
                    "checkout_key": "chk-8f2a",
                }
            ]
        }
    }


class CheckoutResponse(BaseModel):
    order_id: str
    order_number: str
    grand_total: float


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class CancelOrderRequest(BaseModel):
    reason: str | None = None
    expected_revision: int | None = None


class TransitionRequest(BaseModel):
    expected_revision: int | None = None


class DispatchOrderRequest(BaseModel):
    tracking_number: str | None = None
    expected_revision: int | None = None


class AdvanceStatusRequest(BaseModel):
    status: str
    tracking_number: str | None = None
    expected_revision: int | None = None


class AdminNoteRequest(BaseModel):
    note: str


class OrderLineSchema(BaseModel):
    product_id: str
    name: str
    image: str | None = None
    unit_price: float
    original_unit_price: float
    discount: float
    quantity: int
    line_total: float


class ShippingAddressSchema(BaseModel):
    recipient_name: str
    phone: str
    address_line: str
    barangay: str | None = None
    city: str
    province: str
    postal_code: str | None = None
    full_address: str


class OrderResponse(BaseModel):
    order_id: str
    order_number: str
    customer_id: str
    status: str
    revision: int
    items: list[OrderLineSchema]
    shipping_address: ShippingAddressSchema | None = None
    payment_method: str
    delivery_method: str | None = None
    total_amount: float
    shipping_fee: float
    shipping_fee_confirmed: bool
    grand_total: float
    tracking_number: str | None = None
    customer_notes: str | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None
    completed_at: datetime | None = None


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str


class StatusResponse(BaseModel):
    status: str = "ok"
