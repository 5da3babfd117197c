"""Product models for mock store"""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from .base import CamelModel, Money


class ProductSize(CamelModel):
    """Size variant with its own price"""
    label: str
    price: Money = Field(gt=0)


class Product(CamelModel):
    """Product in the catalog"""
    id: str
    slug: str
    name: str
    description: str
    price: Money = Field(gt=0)
    currency: str = "TRY"
    category: str
    sizes: list[ProductSize] = []
    images: list[str] = []
    stock: int = Field(ge=0, default=100)
    is_active: bool = True

    def price_for(self, size: Optional[str]) -> Optional[Decimal]:
        """Catalog price of a size variant (base price without a size)"""
        if size is None:
            return self.price
        variant = next((s for s in self.sizes if s.label == size), None)
        return variant.price if variant else None
