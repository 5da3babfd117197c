"""Tests for the order submission flow."""

from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from mock_store.database import order_db
from mock_store.main import app as mock_store_app
from storefront.core.session import ErrorKind, SubmissionState
from storefront.errors import CheckoutStateError, EmptyCartError, ShippingValidationError
from storefront.models import PaymentMethod
from storefront.services import CheckoutFlow, StoreApiClient
from storefront.services.checkout import NETWORK_ERROR_MESSAGE, validate_shipping_form

STORE_URL = "http://mock-store"


class DropFirstResponse(httpx.AsyncBaseTransport):
    """Delivers requests to the store but loses the first response"""

    def __init__(self, app):
        self.inner = httpx.ASGITransport(app=app)
        self.dropped = False

    async def handle_async_request(self, request):
        response = await self.inner.handle_async_request(request)
        if not self.dropped:
            self.dropped = True
            await response.aclose()
            raise httpx.ReadTimeout("timed out", request=request)
        return response


class RecordingHandler:
    """MockTransport handler answering from a queue of responses"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def created(order_number):
    return httpx.Response(
        201,
        json={"success": True, "message": "Order created", "data": {"orderNumber": order_number}},
    )


@pytest_asyncio.fixture
async def make_flow(cart_store):
    clients = []

    def _make_flow(transport):
        client = StoreApiClient(STORE_URL, transport=transport)
        clients.append(client)
        return CheckoutFlow(cart_store, client)

    yield _make_flow
    for client in clients:
        await client.close()


@pytest.fixture
def flow(make_flow, mock_store_transport):
    return make_flow(mock_store_transport)


class TestSuccessfulSubmission:
    @pytest.mark.asyncio
    async def test_success_empties_cart_and_shows_order_number(self, make_flow, cart_store, make_item, shipping_form):
        handler = RecordingHandler(created("CL000123"))
        flow = make_flow(httpx.MockTransport(handler))
        cart_store.add_item(make_item("A", "250ml", "100"), 3)

        outcome = await flow.checkout(shipping_form)

        assert outcome.succeeded
        assert outcome.order_number == "CL000123"
        assert flow.state == SubmissionState.SUCCESS
        assert flow.session.order_number == "CL000123"
        assert cart_store.is_empty
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_changes_made_during_submission_are_kept(self, make_flow, cart_store, make_item, shipping_form):
        def handler(request):
            cart_store.add_item(make_item("B"))
            cart_store.add_item(make_item("A"), 2)
            return created("CL000001")

        flow = make_flow(httpx.MockTransport(handler))
        cart_store.add_item(make_item("A"), 1)

        outcome = await flow.checkout(shipping_form)

        assert outcome.order_number == "CL000001"
        assert [(line.product_id, line.quantity) for line in cart_store.lines] == [("A", 2), ("B", 1)]

    @pytest.mark.asyncio
    async def test_against_mock_store(self, flow, cart_store, catalog_item, shipping_form):
        cart_store.add_item(catalog_item, 2)

        outcome = await flow.checkout(shipping_form, payment_method=PaymentMethod.BANK_TRANSFER)

        assert outcome.order_number == "CL000001"
        order = order_db.get_by_number("CL000001")
        assert order.total == Decimal("99.98")
        assert order.payment_method.value == "bank_transfer"
        assert order.shipping_address.full_name == "Ayse Yilmaz"

    @pytest.mark.asyncio
    async def test_success_is_terminal(self, flow, cart_store, catalog_item, shipping_form):
        cart_store.add_item(catalog_item)
        await flow.checkout(shipping_form)

        cart_store.add_item(catalog_item)
        with pytest.raises(CheckoutStateError):
            await flow.checkout(shipping_form)
        assert len(order_db.orders) == 1

    @pytest.mark.asyncio
    async def test_reset_allows_a_new_order(self, flow, cart_store, catalog_item, shipping_form):
        cart_store.add_item(catalog_item)
        await flow.checkout(shipping_form)

        flow.reset()
        cart_store.add_item(catalog_item)
        outcome = await flow.checkout(shipping_form)

        assert outcome.order_number == "CL000002"
        assert flow.session.attempts == 1


class TestFailedSubmission:
    @pytest.mark.asyncio
    async def test_network_failure_keeps_cart(self, make_flow, cart_store, make_item, shipping_form):
        handler = RecordingHandler(httpx.ConnectError("connection refused"))
        flow = make_flow(httpx.MockTransport(handler))
        cart_store.add_item(make_item("A"), 2)
        before = cart_store.lines

        outcome = await flow.checkout(shipping_form)

        assert not outcome.succeeded
        assert outcome.error_kind == ErrorKind.NETWORK
        assert outcome.error_message == NETWORK_ERROR_MESSAGE
        assert flow.state == SubmissionState.ERROR
        assert cart_store.lines == before

    @pytest.mark.asyncio
    async def test_rejection_message_is_shown_verbatim(self, make_flow, cart_store, make_item, shipping_form):
        rejection = httpx.Response(400, json={"success": False, "message": "Product price changed: Product A"})
        flow = make_flow(httpx.MockTransport(RecordingHandler(rejection)))
        cart_store.add_item(make_item("A"))

        outcome = await flow.checkout(shipping_form)

        assert outcome.error_kind == ErrorKind.REJECTED
        assert flow.session.error_message == "Product price changed: Product A"
        assert cart_store.line_count == 1

    @pytest.mark.asyncio
    async def test_manual_retry_reuses_idempotency_key(self, make_flow, cart_store, make_item, shipping_form):
        handler = RecordingHandler(httpx.ReadTimeout("timed out"), created("CL000042"))
        flow = make_flow(httpx.MockTransport(handler))
        cart_store.add_item(make_item("A"))

        await flow.checkout(shipping_form)
        outcome = await flow.checkout(shipping_form)

        assert outcome.order_number == "CL000042"
        assert flow.session.attempts == 2
        first_key, second_key = (r.headers["Idempotency-Key"] for r in handler.requests)
        assert first_key == second_key

    @pytest.mark.asyncio
    async def test_changed_cart_gets_a_new_key(self, make_flow, cart_store, make_item, shipping_form):
        handler = RecordingHandler(httpx.ReadTimeout("timed out"), created("CL000043"))
        flow = make_flow(httpx.MockTransport(handler))
        cart_store.add_item(make_item("A"))

        await flow.checkout(shipping_form)
        cart_store.add_item(make_item("B"))
        await flow.checkout(shipping_form)

        first_key, second_key = (r.headers["Idempotency-Key"] for r in handler.requests)
        assert first_key != second_key

    @pytest.mark.asyncio
    async def test_lost_response_does_not_duplicate_order(self, make_flow, cart_store, catalog_item, shipping_form):
        flow = make_flow(DropFirstResponse(mock_store_app))
        cart_store.add_item(catalog_item, 2)

        first = await flow.checkout(shipping_form)
        assert first.error_kind == ErrorKind.NETWORK
        assert len(order_db.orders) == 1

        retry = await flow.checkout(shipping_form)

        assert retry.order_number == "CL000001"
        assert len(order_db.orders) == 1
        assert cart_store.is_empty

    @pytest.mark.asyncio
    async def test_dismiss_error_returns_to_idle(self, make_flow, cart_store, make_item, shipping_form):
        flow = make_flow(httpx.MockTransport(RecordingHandler(httpx.ConnectError("down"))))
        cart_store.add_item(make_item("A"))
        await flow.checkout(shipping_form)

        flow.dismiss_error()

        assert flow.state == SubmissionState.IDLE
        assert flow.session.error_message is None
        assert cart_store.line_count == 1

    @pytest.mark.asyncio
    async def test_dismiss_outside_error_is_noop(self, flow):
        flow.dismiss_error()
        assert flow.state == SubmissionState.IDLE


class TestValidation:
    @pytest.mark.asyncio
    async def test_empty_cart(self, flow, shipping_form):
        with pytest.raises(EmptyCartError):
            await flow.checkout(shipping_form)
        assert flow.state == SubmissionState.IDLE
        assert flow.session.attempts == 0

    @pytest.mark.asyncio
    async def test_blank_field(self, flow, cart_store, catalog_item, shipping_form):
        cart_store.add_item(catalog_item)

        with pytest.raises(ShippingValidationError) as exc_info:
            await flow.checkout({**shipping_form, "city": "  "})

        assert exc_info.value.field_errors == {"city": "This field is required"}
        assert flow.state == SubmissionState.IDLE
        assert cart_store.line_count == 1
        assert order_db.orders == {}

    @pytest.mark.asyncio
    async def test_invalid_email(self, flow, cart_store, catalog_item, shipping_form):
        cart_store.add_item(catalog_item)

        with pytest.raises(ShippingValidationError) as exc_info:
            await flow.checkout({**shipping_form, "email": "ayse@example"})

        assert exc_info.value.field_errors["email"] == "Please enter a valid email address"
        assert flow.state == SubmissionState.IDLE

    def test_missing_fields_are_collected(self, shipping_form):
        form = {k: v for k, v in shipping_form.items() if k not in ("phone", "district")}

        with pytest.raises(ShippingValidationError) as exc_info:
            validate_shipping_form(form)

        assert exc_info.value.field_errors == {
            "phone": "This field is required",
            "district": "This field is required",
        }
