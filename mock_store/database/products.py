"""Mock product database"""

from decimal import Decimal
from typing import Optional

from ..models.product import Product, ProductSize


def _seed_products() -> dict[str, Product]:
    products = [
        Product(
            id="prod-001",
            slug="cardiolive-extra-virgin-zeytinyagi",
            name="Cardiolive Extra Virgin Olive Oil",
            description="Cold-pressed extra virgin olive oil from Aegean groves. Fully organic.",
            price=Decimal("89.99"),
            category="organic",
            sizes=[
                ProductSize(label="250ml", price=Decimal("49.99")),
                ProductSize(label="500ml", price=Decimal("89.99")),
                ProductSize(label="1L", price=Decimal("159.99")),
            ],
            images=["/products/zeytinyagi-500ml-1.jpg", "/products/zeytinyagi-500ml-2.jpg"],
            stock=150,
        ),
        Product(
            id="prod-002",
            slug="cardiolive-sizma-zeytinyagi",
            name="Cardiolive Cold Press Olive Oil",
            description="Traditionally produced cold press olive oil for everyday cooking.",
            price=Decimal("159.99"),
            category="cold-press",
            sizes=[
                ProductSize(label="1L", price=Decimal("159.99")),
                ProductSize(label="2L", price=Decimal("289.99")),
            ],
            images=["/products/zeytinyagi-1l-1.jpg"],
            stock=100,
        ),
        Product(
            id="prod-003",
            slug="cardiolive-premium-zeytinyagi",
            name="Cardiolive Premium Olive Oil",
            description="Premium series olive oil in a gift-sized bottle.",
            price=Decimal("49.99"),
            category="premium",
            sizes=[ProductSize(label="250ml", price=Decimal("49.99"))],
            images=["/products/premium-250ml-1.jpg"],
            stock=75,
        ),
        Product(
            id="prod-004",
            slug="cardiolive-zeytin-sabunu",
            name="Cardiolive Olive Oil Soap",
            description="Handmade soap with olive oil, no size variants.",
            price=Decimal("34.50"),
            category="care",
            images=["/products/sabun-1.jpg"],
            stock=200,
        ),
    ]
    return {p.id: p for p in products}


class ProductDatabase:
    """In-memory product database for mock store"""

    def __init__(self):
        self.products = _seed_products()

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID or slug"""
        product = self.products.get(product_id)
        if product is None:
            product = next((p for p in self.products.values() if p.slug == product_id), None)
        return product

    def search_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        active_only: bool = True,
    ) -> list[Product]:
        """List products matching the filters"""
        results = list(self.products.values())

        if active_only:
            results = [p for p in results if p.is_active]

        if category:
            results = [p for p in results if p.category == category]

        if search:
            query = search.lower()
            results = [
                p for p in results
                if query in p.name.lower() or query in p.description.lower()
            ]

        return results

    def decrement_stock(self, product_id: str, quantity: int) -> None:
        """Take ordered units out of stock"""
        product = self.get_product(product_id)
        if product:
            product.stock = max(product.stock - quantity, 0)

    def reset(self) -> None:
        self.products = _seed_products()


# Singleton instance
product_db = ProductDatabase()
