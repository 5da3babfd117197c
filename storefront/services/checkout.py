"""
Order Submission Flow

Turns the cart snapshot and a shipping form into exactly one POST to the
store API and tracks the outcome:

    Idle -> Submitting -> Success | Error
    Error -> Submitting (manual retry) | Idle (error dismissed)

Success is terminal for the cart it submitted. Nothing is retried
automatically. A retry of an identical request reuses the failed
attempt's idempotency key.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from ..core.session import CheckoutSession, ErrorKind, SubmissionState
from ..errors import (
    CheckoutStateError,
    EmptyCartError,
    NetworkError,
    ServerRejection,
    ShippingValidationError,
)
from ..models.order import OrderConfirmation, OrderRequest, PaymentMethod, ShippingAddress
from .cart_store import CartStore
from .store_client import StoreApiClient

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Could not reach the store. Your cart was kept, please try again."


@dataclass
class SubmissionOutcome:
    """Result of one submission attempt"""
    state: SubmissionState
    order_number: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    confirmation: Optional[OrderConfirmation] = None

    @property
    def succeeded(self) -> bool:
        return self.state == SubmissionState.SUCCESS


def _field_errors(error: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for item in error.errors():
        field = str(item["loc"][0]) if item["loc"] else "shippingAddress"
        if item["type"] == "missing":
            message = "This field is required"
        else:
            message = item["msg"].removeprefix("Value error, ")
        errors.setdefault(field, message)
    return errors


def validate_shipping_form(form: Union[ShippingAddress, Mapping[str, Any]]) -> ShippingAddress:
    """Validate the checkout form, collecting a message per invalid field"""
    if isinstance(form, ShippingAddress):
        return form
    try:
        return ShippingAddress.model_validate(dict(form))
    except ValidationError as e:
        field_errors = _field_errors(e)
        first_field, first_message = next(iter(field_errors.items()))
        raise ShippingValidationError(f"{first_field}: {first_message}", field_errors) from e


class CheckoutFlow:
    """Single-cart checkout state machine"""

    def __init__(self, cart_store: CartStore, client: StoreApiClient):
        self.cart = cart_store
        self.client = client
        self.session = CheckoutSession()
        self._failed_request: Optional[OrderRequest] = None

    @property
    def state(self) -> SubmissionState:
        return self.session.state

    def build_request(
        self,
        shipping_form: Union[ShippingAddress, Mapping[str, Any]],
        payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY,
        notes: Optional[str] = None,
    ) -> OrderRequest:
        """Snapshot the cart into an order request, validating the form"""
        if self.cart.is_empty:
            raise EmptyCartError()

        shipping_address = validate_shipping_form(shipping_form)

        return OrderRequest(
            items=self.cart.snapshot(),
            total=self.cart.get_total_price(),
            shipping_address=shipping_address,
            payment_method=PaymentMethod(payment_method),
            notes=notes or None,
        )

    async def submit_order(self, order_request: OrderRequest) -> SubmissionOutcome:
        """Post the order once and move to Success or Error"""
        if not self.session.can_move_to(SubmissionState.SUBMITTING):
            raise CheckoutStateError(
                f"Cannot submit while checkout is {self.session.state.value}"
            )

        if self._failed_request is not None and self._failed_request.same_contents(order_request):
            order_request = order_request.model_copy(
                update={"idempotency_key": self._failed_request.idempotency_key}
            )
            logger.info("Retrying previous order submission with the same idempotency key")

        self.session.update_state(SubmissionState.SUBMITTING)
        self.session.attempts += 1
        self.session.error_kind = None
        self.session.error_message = None

        try:
            confirmation = await self.client.create_order(order_request)
        except NetworkError as e:
            return self._fail(order_request, ErrorKind.NETWORK, NETWORK_ERROR_MESSAGE, e)
        except ServerRejection as e:
            return self._fail(order_request, ErrorKind.REJECTED, e.message, e)

        self.cart.remove_ordered(order_request.items)
        self._failed_request = None
        self.session.order_number = confirmation.order_number
        self.session.update_state(SubmissionState.SUCCESS)
        logger.info(f"Checkout completed with order {confirmation.order_number}")

        return SubmissionOutcome(
            state=SubmissionState.SUCCESS,
            order_number=confirmation.order_number,
            confirmation=confirmation,
        )

    def _fail(
        self,
        order_request: OrderRequest,
        kind: ErrorKind,
        message: str,
        error: Exception,
    ) -> SubmissionOutcome:
        logger.warning(f"Order submission failed ({kind.value}): {error}")
        self._failed_request = order_request
        self.session.error_kind = kind
        self.session.error_message = message
        self.session.update_state(SubmissionState.ERROR)
        return SubmissionOutcome(
            state=SubmissionState.ERROR,
            error_kind=kind,
            error_message=message,
        )

    async def checkout(
        self,
        shipping_form: Union[ShippingAddress, Mapping[str, Any]],
        payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY,
        notes: Optional[str] = None,
    ) -> SubmissionOutcome:
        """Build the order request from the cart and submit it"""
        if not self.session.can_move_to(SubmissionState.SUBMITTING):
            raise CheckoutStateError(
                f"Cannot submit while checkout is {self.session.state.value}"
            )
        order_request = self.build_request(shipping_form, payment_method, notes)
        return await self.submit_order(order_request)

    def dismiss_error(self) -> None:
        """Hide the error banner; the cart is untouched"""
        if self.session.state != SubmissionState.ERROR:
            return
        self.session.error_kind = None
        self.session.error_message = None
        self.session.update_state(SubmissionState.IDLE)

    def reset(self) -> None:
        """Start a fresh checkout for a new cart"""
        if self.session.state == SubmissionState.SUBMITTING:
            raise CheckoutStateError("Cannot reset while an order is being submitted")
        self.session = CheckoutSession()
        self._failed_request = None
