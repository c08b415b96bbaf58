"""FastAPI routes for the Ordering domain: cart, checkout, orders and fulfillment."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain
from shared.accounts.port import CurrentUser
from shared.http import current_user

from ordering.api.schemas import (
    AddToCartRequest,
    AdminNoteRequest,
    AdvanceStatusRequest,
    CancelOrderRequest,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    DispatchOrderRequest,
    OrderResponse,
    OrderStatusResponse,
    StatusResponse,
    TransitionRequest,
    UpdateCartQuantityRequest,
)
from ordering.cart.cart import ShoppingCart
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.checkout.checkout import ContactInfo, ShippingInfo, submit_checkout
from ordering.order.cancellation import CancelOrder
from ordering.order.fulfillment import AdvanceOrderStatus, ApproveOrder, CompleteOrder, DispatchOrder
from ordering.order.listing import get_order, list_orders
from ordering.order.locking import process_serialized
from ordering.order.notes import AddAdminNote
from ordering.order.shipping_fee import ConfirmShippingFee
from ordering.pricing import compute_shipping_fee, compute_total


def _cart_response(customer_id) -> CartResponse:
    cart = current_domain.repository_for(ShoppingCart).find_for_customer(customer_id)
    if cart is None or not cart.items:
        return CartResponse(customer_id=str(customer_id))

    shipping_fee = compute_shipping_fee(cart.total_price)
    return CartResponse(
        customer_id=str(customer_id),
        items=[
            {
                "product_id": str(item.product_id),
                "name": item.name,
                "image": item.image,
                "unit_price": item.unit_price,
                "original_unit_price": item.original_unit_price,
                "quantity": item.quantity,
                "line_total": item.line_total,
            }
            for item in cart.items
        ],
        total_items=cart.total_items,
        total_price=cart.total_price,
        shipping_fee=shipping_fee,
        grand_total=compute_total(cart.total_price, shipping_fee),
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def view_cart(user: CurrentUser = Depends(current_user)) -> CartResponse:
    return _cart_response(user.id)


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, user: CurrentUser = Depends(current_user)) -> CartResponse:
    command = AddToCart(
        customer_id=user.id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(user.id)


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str, body: UpdateCartQuantityRequest, user: CurrentUser = Depends(current_user)
) -> CartResponse:
    command = UpdateCartQuantity(
        customer_id=user.id,
        product_id=product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(user.id)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, user: CurrentUser = Depends(current_user)) -> CartResponse:
    command = RemoveFromCart(customer_id=user.id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return _cart_response(user.id)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
async def checkout(body: CheckoutRequest, user: CurrentUser = Depends(current_user)) -> CheckoutResponse:
    receipt = submit_checkout(
        customer_id=user.id,
        contact=ContactInfo(**body.contact.model_dump()),
        shipping=ShippingInfo(**body.shipping.model_dump()),
        payment_method=body.payment_method,
        delivery_method=body.delivery_method,
        customer_notes=body.customer_notes,
        checkout_key=body.checkout_key,
    )
    return CheckoutResponse(**receipt)


# ---------------------------------------------------------------------------
# Order Router (customer-facing)
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
async def my_orders(
    status: str | None = None,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user: CurrentUser = Depends(current_user),
) -> list[OrderResponse]:
    return list_orders(user.id, status=status, limit=limit, offset=offset)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def order_detail(order_id: str, user: CurrentUser = Depends(current_user)) -> OrderResponse:
    return get_order(order_id, customer_id=user.id)


@order_router.post("/{order_id}/cancel", response_model=OrderStatusResponse)
async def cancel_order(
    order_id: str, body: CancelOrderRequest, user: CurrentUser = Depends(current_user)
) -> OrderStatusResponse:
    command = CancelOrder(
        order_id=order_id,
        customer_id=user.id,
        reason=body.reason,
        expected_revision=body.expected_revision,
    )
    process_serialized(command)
    return OrderStatusResponse(order_id=order_id, status="cancelled")


@order_router.put("/{order_id}/shipping-fee/confirm", response_model=StatusResponse)
async def confirm_shipping_fee(order_id: str, user: CurrentUser = Depends(current_user)) -> StatusResponse:
    process_serialized(ConfirmShippingFee(order_id=order_id, customer_id=user.id))
    return StatusResponse()


# ---------------------------------------------------------------------------
# Fulfillment Router (staff and fulfillment integrations)
# ---------------------------------------------------------------------------
fulfillment_router = APIRouter(prefix="/orders", tags=["fulfillment"])


@fulfillment_router.put("/{order_id}/approve", response_model=OrderStatusResponse)
async def approve_order(order_id: str, body: TransitionRequest | None = None) -> OrderStatusResponse:
    command = ApproveOrder(order_id=order_id, expected_revision=body.expected_revision if body else None)
    return OrderStatusResponse(order_id=order_id, status=process_serialized(command))


@fulfillment_router.put("/{order_id}/dispatch", response_model=OrderStatusResponse)
async def dispatch_order(order_id: str, body: DispatchOrderRequest | None = None) -> OrderStatusResponse:
    body = body or DispatchOrderRequest()
    command = DispatchOrder(
        order_id=order_id,
        tracking_number=body.tracking_number,
        expected_revision=body.expected_revision,
    )
    return OrderStatusResponse(order_id=order_id, status=process_serialized(command))


@fulfillment_router.put("/{order_id}/complete", response_model=OrderStatusResponse)
async def complete_order(order_id: str, body: TransitionRequest | None = None) -> OrderStatusResponse:
    command = CompleteOrder(order_id=order_id, expected_revision=body.expected_revision if body else None)
    return OrderStatusResponse(order_id=order_id, status=process_serialized(command))


@fulfillment_router.put("/{order_id}/status", response_model=OrderStatusResponse)
async def advance_order_status(order_id: str, body: AdvanceStatusRequest) -> OrderStatusResponse:
    command = AdvanceOrderStatus(
        order_id=order_id,
        status=body.status,
        tracking_number=body.tracking_number,
        expected_revision=body.expected_revision,
    )
    return OrderStatusResponse(order_id=order_id, status=process_serialized(command))


@fulfillment_router.post("/{order_id}/notes", response_model=StatusResponse)
async def add_admin_note(order_id: str, body: AdminNoteRequest) -> StatusResponse:
    process_serialized(AddAdminNote(order_id=order_id, note=body.note))
    return StatusResponse()
