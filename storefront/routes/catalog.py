"""Catalog and blog pass-through routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..errors import NetworkError, ServerRejection
from ..services.store_client import StoreApiClient
from .dependencies import get_store_client, upstream_http_error

router = APIRouter(prefix="/api/catalog", tags=["Catalog"])


@router.get("/products")
async def list_products(
    category: Optional[str] = Query(None, description="Filter by category"),
    search: Optional[str] = Query(None, description="Search query"),
    client: StoreApiClient = Depends(get_store_client),
):
    """List catalog products"""
    try:
        return await client.list_products(category=category, search=search)
    except (NetworkError, ServerRejection) as e:
        raise upstream_http_error(e)


@router.get("/products/{product_id}")
async def get_product(
    product_id: str,
    client: StoreApiClient = Depends(get_store_client),
):
    """Get a product by ID or slug"""
    try:
        return await client.get_product(product_id)
    except (NetworkError, ServerRejection) as e:
        raise upstream_http_error(e)


@router.get("/blogs")
async def list_blogs(client: StoreApiClient = Depends(get_store_client)):
    """List published blog posts"""
    try:
        return await client.list_blogs()
    except (NetworkError, ServerRejection) as e:
        raise upstream_http_error(e)


@router.get("/blogs/{blog_id}")
async def get_blog(
    blog_id: str,
    client: StoreApiClient = Depends(get_store_client),
):
    """Get a blog post by ID or slug"""
    try:
        return await client.get_blog(blog_id)
    except (NetworkError, ServerRejection) as e:
        raise upstream_http_error(e)

