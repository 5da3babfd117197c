"""Product API routes for mock store"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ..database.products import product_db
from ..models.base import ApiResponse

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=ApiResponse)
async def list_products(
    category: Optional[str] = Query(None, description="Filter by category"),
    search: Optional[str] = Query(None, description="Search query"),
):
    """List active products in the catalog"""
    products = product_db.search_products(category=category, search=search)
    return ApiResponse(data=[p.model_dump(mode="json", by_alias=True) for p in products])


@router.get("/{product_id}", response_model=ApiResponse)
async def get_product(product_id: str):
    """Get a product by ID or slug"""
    product = product_db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return ApiResponse(data=product.model_dump(mode="json", by_alias=True))
