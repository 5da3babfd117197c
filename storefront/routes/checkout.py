"""Checkout API routes for the storefront"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException

from ..core.session import ErrorKind, SubmissionState
from ..errors import CheckoutStateError, CheckoutValidationError, NetworkError, ServerRejection
from ..models.cart import CamelModel
from ..models.order import PaymentMethod
from ..services.checkout import CheckoutFlow
from ..services.store_client import StoreApiClient
from .dependencies import get_checkout_flow, get_store_client, upstream_http_error

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


class CheckoutRequest(CamelModel):
    """Checkout form as posted by the page"""
    shipping_address: dict[str, Any]
    payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY
    notes: Optional[str] = None


class CheckoutErrorView(CamelModel):
    kind: ErrorKind
    message: str


class CheckoutView(CamelModel):
    """Checkout state as shown to the user"""
    state: SubmissionState
    order_number: Optional[str] = None
    error: Optional[CheckoutErrorView] = None
    attempts: int = 0


def checkout_view(flow: CheckoutFlow) -> CheckoutView:
    session = flow.session
    error = None
    if session.error_kind and session.error_message:
        error = CheckoutErrorView(kind=session.error_kind, message=session.error_message)
    return CheckoutView(
        state=session.state,
        order_number=session.order_number,
        error=error,
        attempts=session.attempts,
    )


@router.get("", response_model=CheckoutView)
async def get_checkout(flow: CheckoutFlow = Depends(get_checkout_flow)):
    """Get current checkout state"""
    return checkout_view(flow)


@router.post("", response_model=CheckoutView)
async def submit_checkout(
    request: CheckoutRequest,
    flow: CheckoutFlow = Depends(get_checkout_flow),
):
    """
    Submit the cart as an order.

    Validation problems are answered with 422 and per-field messages.
    Network failures and store rejections leave the cart intact and are
    reported in the returned state so the user can retry.
    """
    try:
        await flow.checkout(
            request.shipping_address,
            payment_method=request.payment_method,
            notes=request.notes,
        )
    except CheckoutValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": e.message, "fieldErrors": e.field_errors},
        )
    except CheckoutStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return checkout_view(flow)


@router.post("/dismiss", response_model=CheckoutView)
async def dismiss_error(flow: CheckoutFlow = Depends(get_checkout_flow)):
    """Dismiss the error banner"""
    flow.dismiss_error()
    return checkout_view(flow)


@router.post("/reset", response_model=CheckoutView)
async def reset_checkout(flow: CheckoutFlow = Depends(get_checkout_flow)):
    """Start a new checkout after a completed order"""
    try:
        flow.reset()
    except CheckoutStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return checkout_view(flow)


@router.get("/orders/{order_number}")
async def track_order(
    order_number: str,
    client: StoreApiClient = Depends(get_store_client),
):
    """Get tracking info for a placed order"""
    try:
        return await client.track_order(order_number)
    except (NetworkError, ServerRejection) as e:
        raise upstream_http_error(e)
