"""Order API routes for mock store"""

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Header, HTTPException
from fastapi.responses import JSONResponse

from ..database.orders import order_db
from ..database.products import product_db
from ..models.base import ApiResponse
from ..models.order import CreateOrderRequest, OrderRecord, OrderStatus, UpdateStatusRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])

PRICE_TOLERANCE = Decimal("0.01")


def _check_items(request: CreateOrderRequest) -> None:
    """Items must exist in the catalog, in stock, at their current price"""
    for item in request.items:
        product = product_db.get_product(item.product_id)
        if not product:
            raise HTTPException(status_code=400, detail=f"Product not found: {item.name}")

        if not product.is_active or product.stock < item.quantity:
            raise HTTPException(status_code=400, detail=f"Insufficient stock: {item.name}")

        catalog_price = product.price_for(item.size_variant)
        if catalog_price is None:
            raise HTTPException(
                status_code=400,
                detail=f"Size not available: {item.name} ({item.size_variant})",
            )
        if abs(catalog_price - item.unit_price) > PRICE_TOLERANCE:
            raise HTTPException(status_code=400, detail=f"Product price changed: {item.name}")

    expected_total = sum((item.line_total for item in request.items), Decimal("0"))
    if abs(expected_total - request.total) > PRICE_TOLERANCE:
        raise HTTPException(status_code=400, detail="Order total does not match items")


@router.post("", status_code=201, response_model=ApiResponse)
async def create_order(
    request: CreateOrderRequest,
    idempotency_key: Optional[str] = Header(None),
):
    """
    Create an order.

    A repeated Idempotency-Key returns the order created by the first
    request instead of creating another one.
    """
    if idempotency_key:
        existing = order_db.get_by_idempotency_key(idempotency_key)
        if existing:
            logger.info(f"Order {existing.order_number} replayed for idempotency key {idempotency_key}")
            body = ApiResponse(message="Order already created", data=existing.summary())
            return JSONResponse(status_code=200, content=body.model_dump(mode="json"))

    _check_items(request)

    order = order_db.create_order(request, idempotency_key=idempotency_key)
    for item in request.items:
        product_db.decrement_stock(item.product_id, item.quantity)
    logger.info(
        f"Order {order.order_number} created: {order.total} - "
        f"{len(order.items)} item(s), {order.payment_method.value}"
    )

    return ApiResponse(message="Order created", data=order.summary())


def _tracking_info(order: OrderRecord) -> dict:
    """Tracking number and a status history derived from the current status"""
    created = order.created_at
    history = [
        {"status": "pending", "date": created, "description": "Order placed"},
    ]
    if order.status in (OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED):
        history.append({
            "status": "processing",
            "date": created + timedelta(hours=2),
            "description": "Order is being prepared for shipment",
        })
    if order.status in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
        history.append({
            "status": "shipped",
            "date": created + timedelta(hours=24),
            "description": "Package has been dispatched and is on its way",
        })
    if order.status == OrderStatus.DELIVERED:
        history.append({
            "status": "delivered",
            "date": order.updated_at,
            "description": "Package has been delivered",
        })
    if order.status == OrderStatus.CANCELLED:
        history.append({
            "status": "cancelled",
            "date": order.updated_at,
            "description": "Order was cancelled",
        })

    return {
        "orderNumber": order.order_number,
        "status": order.status.value,
        "paymentStatus": order.payment_status.value,
        "estimatedDelivery": (created + timedelta(days=7)).isoformat(),
        "trackingNumber": order.tracking_number or f"TRK{order.id[-8:].upper()}",
        "shippingAddress": order.shipping_address.model_dump(mode="json", by_alias=True),
        "statusHistory": [{**entry, "date": entry["date"].isoformat()} for entry in history],
    }


@router.get("/track/{order_number}", response_model=ApiResponse)
async def track_order(order_number: str):
    """Track an order by order number"""
    order = order_db.get_by_number(order_number)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return ApiResponse(data=_tracking_info(order))


@router.put("/{order_number}/status", response_model=ApiResponse)
async def update_order_status(order_number: str, request: UpdateStatusRequest):
    """Move an order to a new status"""
    order = order_db.update_status(order_number, request.status)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return ApiResponse(message="Order status updated", data=order.summary())
