"""Tests for the store API client."""

from decimal import Decimal

import httpx
import pytest

from mock_store.database import order_db
from storefront.errors import NetworkError, ServerRejection
from storefront.models import CartLine, OrderRequest, OrderStatus, PaymentStatus, ShippingAddress
from storefront.services import StoreApiClient

STORE_URL = "http://mock-store"


@pytest.fixture
def order_request(catalog_item, shipping_form):
    line = CartLine(**catalog_item.model_dump(), quantity=2)
    return OrderRequest(
        items=[line],
        total=line.line_total,
        shipping_address=ShippingAddress.model_validate(shipping_form),
    )


def client_with(handler) -> StoreApiClient:
    return StoreApiClient(STORE_URL, transport=httpx.MockTransport(handler))


class TestCreateOrder:
    @pytest.mark.asyncio
    async def test_creates_sequential_orders(self, store_client, order_request, catalog_item, shipping_form):
        first = await store_client.create_order(order_request)
        second_request = OrderRequest(
            items=order_request.items,
            total=order_request.total,
            shipping_address=ShippingAddress.model_validate(shipping_form),
        )
        second = await store_client.create_order(second_request)

        assert first.order_number == "CL000001"
        assert second.order_number == "CL000002"
        assert first.status == OrderStatus.PENDING
        assert first.payment_status == PaymentStatus.PENDING
        assert first.total == Decimal("99.98")

    @pytest.mark.asyncio
    async def test_sends_idempotency_key(self, store_client, order_request):
        first = await store_client.create_order(order_request)
        replay = await store_client.create_order(order_request)

        assert replay.order_number == first.order_number
        assert len(order_db.orders) == 1

    @pytest.mark.asyncio
    async def test_rejection_message_is_verbatim(self, store_client, order_request, make_item):
        line = CartLine(**make_item("missing", None, "10", "Ghost Oil").model_dump(), quantity=1)
        request = order_request.model_copy(update={"items": [line], "total": Decimal("10")})

        with pytest.raises(ServerRejection) as exc_info:
            await store_client.create_order(request)

        assert exc_info.value.message == "Product not found: Ghost Oil"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_connection_error_is_network_error(self, order_request):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = client_with(handler)
        with pytest.raises(NetworkError):
            await client.create_order(order_request)
        await client.close()

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self, order_request):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = client_with(handler)
        with pytest.raises(NetworkError):
            await client.create_order(order_request)
        await client.close()

    @pytest.mark.asyncio
    async def test_non_json_error_falls_back_to_status(self, order_request):
        client = client_with(lambda request: httpx.Response(503, text="Service Unavailable"))

        with pytest.raises(ServerRejection) as exc_info:
            await client.create_order(order_request)

        assert exc_info.value.message == "HTTP 503"
        assert exc_info.value.status_code == 503
        await client.close()

    @pytest.mark.asyncio
    async def test_success_false_is_rejection(self, order_request):
        client = client_with(
            lambda request: httpx.Response(200, json={"success": False, "message": "Out of stock"})
        )

        with pytest.raises(ServerRejection) as exc_info:
            await client.create_order(order_request)

        assert exc_info.value.message == "Out of stock"
        await client.close()

    @pytest.mark.asyncio
    async def test_missing_order_number_is_rejection(self, order_request):
        client = client_with(lambda request: httpx.Response(201, json={"success": True, "data": {}}))

        with pytest.raises(ServerRejection):
            await client.create_order(order_request)
        await client.close()

    @pytest.mark.asyncio
    async def test_request_shape(self, order_request):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["key"] = request.headers.get("Idempotency-Key")
            seen["body"] = request.content
            return httpx.Response(201, json={"success": True, "data": {"orderNumber": "CL000123"}})

        client = client_with(handler)
        confirmation = await client.create_order(order_request)
        await client.close()

        assert confirmation.order_number == "CL000123"
        assert seen["method"] == "POST"
        assert seen["path"] == "/api/orders"
        assert seen["key"] == order_request.idempotency_key
        assert b'"fullName"' in seen["body"]


class TestReads:
    @pytest.mark.asyncio
    async def test_list_products(self, store_client):
        products = await store_client.list_products()
        assert {p["id"] for p in products} >= {"prod-001", "prod-002"}

    @pytest.mark.asyncio
    async def test_list_products_by_category(self, store_client):
        products = await store_client.list_products(category="premium")
        assert [p["id"] for p in products] == ["prod-003"]

    @pytest.mark.asyncio
    async def test_get_product_by_slug(self, store_client):
        product = await store_client.get_product("cardiolive-premium-zeytinyagi")
        assert product["id"] == "prod-003"

    @pytest.mark.asyncio
    async def test_list_blogs_only_published(self, store_client):
        blogs = await store_client.list_blogs()
        assert [b["id"] for b in blogs] == ["blog-002", "blog-001"]

    @pytest.mark.asyncio
    async def test_missing_blog_is_rejection(self, store_client):
        with pytest.raises(ServerRejection) as exc_info:
            await store_client.get_blog("blog-003")
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Blog post not found"

    @pytest.mark.asyncio
    async def test_track_order(self, store_client, order_request):
        confirmation = await store_client.create_order(order_request)

        tracking = await store_client.track_order(confirmation.order_number)

        assert tracking["orderNumber"] == "CL000001"
        assert tracking["status"] == "pending"
        assert [entry["status"] for entry in tracking["statusHistory"]] == ["pending"]
