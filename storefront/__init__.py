"""Storefront cart and checkout client"""

__version__ = "1.0.0"
