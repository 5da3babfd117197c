# Mock Store Models

from .base import ApiResponse, CamelModel
from .blog import BlogPost
from .order import (
    CreateOrderRequest,
    OrderItem,
    OrderRecord,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingAddress,
    UpdateStatusRequest,
)
from .product import Product, ProductSize

__all__ = [
    "ApiResponse",
    "CamelModel",
    "BlogPost",
    "CreateOrderRequest",
    "OrderItem",
    "OrderRecord",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "ShippingAddress",
    "UpdateStatusRequest",
    "Product",
    "ProductSize",
]
