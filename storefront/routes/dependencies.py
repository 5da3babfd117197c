"""Route dependencies: objects built at start-up and kept on app.state"""

from fastapi import HTTPException, Request

from ..errors import NetworkError, ServerRejection
from ..services.cart_store import CartStore
from ..services.checkout import CheckoutFlow
from ..services.store_client import StoreApiClient


def get_cart_store(request: Request) -> CartStore:
    return request.app.state.cart_store


def get_store_client(request: Request) -> StoreApiClient:
    return request.app.state.store_client


def get_checkout_flow(request: Request) -> CheckoutFlow:
    return request.app.state.checkout_flow


def upstream_http_error(error: Exception) -> HTTPException:
    """Translate a store API failure for the caller"""
    if isinstance(error, ServerRejection):
        status_code = error.status_code if error.status_code and error.status_code >= 400 else 502
        return HTTPException(status_code=status_code, detail=error.message)
    if isinstance(error, NetworkError):
        return HTTPException(status_code=502, detail=str(error))
    return HTTPException(status_code=500, detail="Unexpected error")
