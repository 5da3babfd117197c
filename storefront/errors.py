"""Storefront error types"""

from typing import Optional


class StorefrontError(Exception):
    """Base class for storefront errors"""


class StorageError(StorefrontError):
    """Local persistence failed (unreadable, corrupt or unwritable)"""


class QuotaExceededError(StorageError):
    """Value does not fit in the storage quota"""


class CheckoutValidationError(StorefrontError):
    """Checkout preconditions are not met"""

    def __init__(self, message: str, field_errors: Optional[dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.field_errors = field_errors or {}


class EmptyCartError(CheckoutValidationError):
    """Checkout attempted with an empty cart"""

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class ShippingValidationError(CheckoutValidationError):
    """Shipping form has missing or malformed fields"""


class NetworkError(StorefrontError):
    """Request could not reach the store API or timed out"""


class ServerRejection(StorefrontError):
    """Store API answered with a non-2xx status or success=false"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CheckoutStateError(StorefrontError):
    """Submission is not allowed in the current checkout state"""
