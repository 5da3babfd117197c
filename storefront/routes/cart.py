"""Cart API routes for the storefront"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import Field

from ..errors import NetworkError, ServerRejection
from ..models.cart import CamelModel, CartItem, CartLine, Money
from ..services.cart_store import CartStore
from ..services.store_client import StoreApiClient
from .dependencies import get_cart_store, get_store_client, upstream_http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cart", tags=["Cart"])


class AddToCartRequest(CartItem):
    """Request to add an item to the cart"""
    quantity: int = Field(default=1, gt=0)


class AddProductRequest(CamelModel):
    """Request to add a catalog product to the cart"""
    size: Optional[str] = None
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(CamelModel):
    """Request to update cart item quantity (below 1 removes the line)"""
    quantity: int


class CartView(CamelModel):
    """Cart as shown to the user"""
    items: list[CartLine]
    total: Money
    line_count: int
    item_count: int
    storage_reset: bool = False


def cart_view(store: CartStore) -> CartView:
    return CartView(
        items=store.lines,
        total=store.get_total_price(),
        line_count=store.line_count,
        item_count=store.item_count,
        storage_reset=store.storage_reset,
    )


@router.get("", response_model=CartView)
async def get_cart(store: CartStore = Depends(get_cart_store)):
    """
    Get cart contents.

    `storageReset` is reported once after local storage failed and the
    cart had to be emptied.
    """
    view = cart_view(store)
    store.acknowledge_reset()
    return view


@router.post("/items", response_model=CartView)
async def add_to_cart(
    request: AddToCartRequest,
    store: CartStore = Depends(get_cart_store),
):
    """Add an item to the cart"""
    store.add_item(request, request.quantity)
    return cart_view(store)


@router.post("/products/{product_id}", response_model=CartView)
async def add_product_to_cart(
    product_id: str,
    request: AddProductRequest,
    store: CartStore = Depends(get_cart_store),
    client: StoreApiClient = Depends(get_store_client),
):
    """Look a product up in the catalog and add it to the cart"""
    try:
        product = await client.get_product(product_id)
    except (NetworkError, ServerRejection) as e:
        raise upstream_http_error(e)

    price = product.get("price")
    if request.size is not None:
        sizes = product.get("sizes") or []
        size = next((s for s in sizes if s.get("label") == request.size), None)
        if size is None:
            raise HTTPException(status_code=400, detail=f"Size not available: {request.size}")
        price = size.get("price", price)

    try:
        unit_price = Decimal(str(price))
    except InvalidOperation:
        unit_price = None
    if unit_price is None or not unit_price.is_finite() or unit_price < 0:
        logger.error(f"Product {product_id} came back without a usable price: {price!r}")
        raise HTTPException(status_code=502, detail="Store returned a product without a price")

    images = product.get("images") or []
    item = CartItem(
        product_id=str(product.get("id", product_id)),
        name=product.get("name", ""),
        unit_price=unit_price,
        size_variant=request.size,
        image_ref=images[0] if images else "",
    )
    store.add_item(item, request.quantity)
    return cart_view(store)


@router.put("/items/{product_id}", response_model=CartView)
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    size: Optional[str] = Query(None, description="Size variant of the line"),
    store: CartStore = Depends(get_cart_store),
):
    """Update item quantity in cart"""
    if not any(line.key == (product_id, size) for line in store.lines):
        raise HTTPException(status_code=404, detail="Item not in cart")

    store.update_quantity(product_id, size, request.quantity)
    return cart_view(store)


@router.delete("/items/{product_id}", response_model=CartView)
async def remove_from_cart(
    product_id: str,
    size: Optional[str] = Query(None, description="Size variant of the line"),
    store: CartStore = Depends(get_cart_store),
):
    """Remove an item from the cart"""
    store.remove_item(product_id, size)
    return cart_view(store)


@router.delete("", response_model=CartView)
async def clear_cart(store: CartStore = Depends(get_cart_store)):
    """Clear all items from cart"""
    store.clear_cart()
    return cart_view(store)
