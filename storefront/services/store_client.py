"""
Store API Client

HTTP client for the store backend: order submission, order tracking and
read-only catalog/blog fetches.
"""

import logging
from typing import Any, Optional

import httpx

from ..errors import NetworkError, ServerRejection
from ..models.order import OrderConfirmation, OrderRequest

logger = logging.getLogger(__name__)


class StoreApiClient:
    """
    Client for the store REST API.

    Responses use the envelope {success, data} on success and
    {success: false, message} on failure.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize store client.

        Args:
            base_url: Base URL of the store API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (in-process apps, tests)
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """Make an HTTP request and return the decoded envelope"""
        url = f"{self.base_url}{path}"
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=request_headers,
                json=body,
                params={k: v for k, v in (params or {}).items() if v is not None},
            )
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {method} {url}")
            raise NetworkError(f"Request to {path} timed out") from e
        except httpx.TransportError as e:
            logger.error(f"Request failed: {method} {url} - {e}")
            raise NetworkError(f"Could not reach the store: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code >= 400:
            message = None
            if isinstance(payload, dict):
                message = payload.get("message")
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise ServerRejection(message or f"HTTP {response.status_code}", response.status_code)

        if not isinstance(payload, dict):
            raise ServerRejection("Unexpected response from the store", response.status_code)

        if payload.get("success") is False:
            raise ServerRejection(payload.get("message") or "Request was rejected", response.status_code)

        return payload

    # ==================== Order APIs ====================

    async def create_order(self, order_request: OrderRequest) -> OrderConfirmation:
        """Submit an order; the idempotency key is sent as a header"""
        payload = await self._request(
            "POST",
            "/api/orders",
            body=order_request.to_payload(),
            headers={"Idempotency-Key": order_request.idempotency_key},
        )

        data = payload.get("data") or payload.get("order")
        if not isinstance(data, dict) or not data.get("orderNumber"):
            raise ServerRejection("Order response did not include an order number")

        confirmation = OrderConfirmation.model_validate(data)
        logger.info(f"Order {confirmation.order_number} created")
        return confirmation

    async def track_order(self, order_number: str) -> dict:
        """Get tracking info for an order number"""
        payload = await self._request("GET", f"/api/orders/track/{order_number}")
        return payload.get("data") or {}

    # ==================== Catalog APIs ====================

    async def list_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[dict]:
        """List products in the catalog"""
        payload = await self._request(
            "GET",
            "/api/products",
            params={"category": category, "search": search},
        )
        return payload.get("data") or []

    async def get_product(self, product_id: str) -> dict:
        """Get product by ID or slug"""
        payload = await self._request("GET", f"/api/products/{product_id}")
        return payload.get("data") or {}

    # ==================== Blog APIs ====================

    async def list_blogs(self) -> list[dict]:
        """List published blog posts"""
        payload = await self._request("GET", "/api/blogs")
        return payload.get("data") or []

    async def get_blog(self, blog_id: str) -> dict:
        """Get a blog post by ID or slug"""
        payload = await self._request("GET", f"/api/blogs/{blog_id}")
        return payload.get("data") or {}
