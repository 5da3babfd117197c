# Storefront Models

from .cart import CartItem, CartLine, dump_lines, load_lines
from .order import (
    OrderConfirmation,
    OrderRequest,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingAddress,
)

__all__ = [
    "CartItem",
    "CartLine",
    "dump_lines",
    "load_lines",
    "OrderConfirmation",
    "OrderRequest",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "ShippingAddress",
]
