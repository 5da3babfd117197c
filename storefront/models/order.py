"""Order models for the storefront"""

import re
import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .cart import CamelModel, CartLine, Money

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_SHIPPING_FIELDS = ("full_name", "email", "phone", "address", "city", "district")


class PaymentMethod(str, Enum):
    CASH_ON_DELIVERY = "cash_on_delivery"
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"


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


class ShippingAddress(CamelModel):
    """Postal and contact fields collected by the checkout form"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )

    full_name: str
    email: str
    phone: str
    address: str
    city: str
    district: str
    postal_code: Optional[str] = None
    notes: Optional[str] = None
    country: str = "Türkiye"

    @field_validator(*REQUIRED_SHIPPING_FIELDS)
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("This field is required")
        return value

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please enter a valid email address")
        return value

    @field_validator("postal_code", "notes")
    @classmethod
    def empty_as_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class OrderRequest(CamelModel):
    """
    Immutable order snapshot posted once per checkout attempt.

    The idempotency key travels as an HTTP header, not in the body.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    items: list[CartLine] = Field(min_length=1)
    total: Money
    shipping_address: ShippingAddress
    payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY
    notes: Optional[str] = None
    idempotency_key: str = Field(default_factory=lambda: uuid.uuid4().hex, exclude=True)

    @model_validator(mode="after")
    def total_matches_items(self) -> "OrderRequest":
        expected = sum((item.line_total for item in self.items), Decimal("0"))
        if self.total != expected:
            raise ValueError(f"Order total {self.total} does not match items total {expected}")
        return self

    def to_payload(self) -> dict[str, Any]:
        """JSON body for POST /api/orders"""
        return self.model_dump(mode="json", by_alias=True)

    def same_contents(self, other: "OrderRequest") -> bool:
        """True when both requests would post the same body"""
        return self.to_payload() == other.to_payload()


class OrderConfirmation(CamelModel):
    """Order data returned by the store API after a successful submission"""
    order_number: str
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    id: Optional[str] = None
    total: Optional[Money] = None
    payment_method: Optional[PaymentMethod] = None
    created_at: Optional[datetime] = None
