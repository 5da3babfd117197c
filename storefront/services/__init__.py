# Storefront services

from .cart_store import CartStore
from .checkout import CheckoutFlow, SubmissionOutcome, validate_shipping_form
from .store_client import StoreApiClient

__all__ = [
    "CartStore",
    "CheckoutFlow",
    "SubmissionOutcome",
    "validate_shipping_form",
    "StoreApiClient",
]
