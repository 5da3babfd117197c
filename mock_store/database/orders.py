"""Order storage for mock store"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from ..models.order import CreateOrderRequest, OrderRecord, OrderStatus

ORDER_NUMBER_PREFIX = "CL"


def format_order_number(sequence: int) -> str:
    """Human-readable order number, e.g. CL000123"""
    return f"{ORDER_NUMBER_PREFIX}{sequence:06d}"


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[str, OrderRecord] = {}

    def create_order(
        self,
        request: CreateOrderRequest,
        idempotency_key: Optional[str] = None,
    ) -> OrderRecord:
        """Create an order numbered after the current order count"""
        now = datetime.now(timezone.utc)

        order = OrderRecord(
            id=uuid.uuid4().hex,
            order_number=format_order_number(len(self.orders) + 1),
            items=request.items,
            total=request.total,
            shipping_address=request.shipping_address,
            payment_method=request.payment_method,
            notes=request.notes,
            idempotency_key=idempotency_key,
            created_at=now,
            updated_at=now,
        )

        self.orders[order.id] = order
        return order

    def get_by_idempotency_key(self, key: str) -> Optional[OrderRecord]:
        return next((o for o in self.orders.values() if o.idempotency_key == key), None)

    def get_by_number(self, order_number: str) -> Optional[OrderRecord]:
        """Get an order by its order number"""
        return next((o for o in self.orders.values() if o.order_number == order_number), None)

    def update_status(self, order_number: str, status: OrderStatus) -> Optional[OrderRecord]:
        """Update order status"""
        order = self.get_by_number(order_number)
        if not order:
            return None

        order.status = status
        order.updated_at = datetime.now(timezone.utc)
        return order

    def reset(self) -> None:
        self.orders = {}


# Singleton instance
order_db = OrderDatabase()
