# Database modules

from .blogs import blog_db, BlogDatabase
from .orders import order_db, OrderDatabase
from .products import product_db, ProductDatabase

__all__ = [
    "blog_db",
    "BlogDatabase",
    "order_db",
    "OrderDatabase",
    "product_db",
    "ProductDatabase",
]
