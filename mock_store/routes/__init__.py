# API Routes

from .blogs import router as blogs_router
from .orders import router as orders_router
from .products import router as products_router

__all__ = ["blogs_router", "orders_router", "products_router"]
