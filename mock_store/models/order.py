"""Order models for mock store"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .base import CamelModel, Money

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
PHONE_PATTERN = r"^[0-9+\-\s()]{10,20}$"
POSTAL_CODE_PATTERN = r"^[0-9]{5}$"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    CASH_ON_DELIVERY = "cash_on_delivery"
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"


class OrderItem(CamelModel):
    """Item in an order"""
    product_id: str
    name: str
    unit_price: Money = Field(gt=0)
    quantity: int = Field(ge=1, le=100)
    size_variant: Optional[str] = None
    image_ref: str = ""

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class ShippingAddress(CamelModel):
    """Shipping address for order"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    full_name: str = Field(min_length=2, max_length=100)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: str = Field(pattern=PHONE_PATTERN)
    address: str = Field(min_length=10, max_length=500)
    city: str = Field(min_length=2, max_length=50)
    district: Optional[str] = None
    postal_code: Optional[str] = Field(default=None, pattern=POSTAL_CODE_PATTERN)
    notes: Optional[str] = Field(default=None, max_length=500)
    country: str = Field(default="Türkiye", min_length=2, max_length=50)

    @model_validator(mode="after")
    def district_defaults_to_city(self) -> "ShippingAddress":
        if not self.district:
            self.district = self.city
        return self


class CreateOrderRequest(CamelModel):
    """Request to create an order"""
    items: list[OrderItem] = Field(min_length=1)
    total: Money = Field(gt=0)
    shipping_address: ShippingAddress
    payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY
    notes: Optional[str] = Field(default=None, max_length=500)


class OrderRecord(CamelModel):
    """Persisted order"""
    id: str
    order_number: str
    items: list[OrderItem]
    total: Money
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    idempotency_key: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    def summary(self) -> dict:
        """Fields returned to the client after creation"""
        return self.model_dump(
            mode="json",
            by_alias=True,
            include={"id", "order_number", "total", "status", "payment_status", "payment_method", "created_at"},
        )


class UpdateStatusRequest(CamelModel):
    """Request to move an order to a new status"""
    status: OrderStatus
