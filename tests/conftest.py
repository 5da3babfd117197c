from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from mock_store.database import order_db, product_db
from mock_store.main import app as mock_store_app
from storefront.core.storage import MemoryStorage
from storefront.models import CartItem
from storefront.services import CartStore, StoreApiClient

STORE_URL = "http://mock-store"


@pytest.fixture(autouse=True)
def reset_mock_store():
    order_db.reset()
    product_db.reset()
    yield
    order_db.reset()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cart_store(storage):
    return CartStore(storage)


@pytest.fixture
def make_item():
    def _make_item(product_id="A", size="250ml", price="100", name=None):
        return CartItem(
            product_id=product_id,
            name=name or f"Product {product_id}",
            unit_price=Decimal(price),
            size_variant=size,
            image_ref=f"/products/{product_id}.jpg",
        )

    return _make_item


@pytest.fixture
def catalog_item(make_item):
    """Item that exists in the mock store catalog at its current price"""
    return make_item("prod-001", "250ml", "49.99", "Cardiolive Extra Virgin Olive Oil")


@pytest.fixture
def shipping_form():
    return {
        "fullName": "Ayse Yilmaz",
        "email": "ayse@example.com",
        "phone": "+90 532 123 45 67",
        "address": "Ataturk Cad. No: 12 Daire 3",
        "city": "Izmir",
        "district": "Konak",
        "postalCode": "35250",
    }


@pytest.fixture
def mock_store_transport():
    return httpx.ASGITransport(app=mock_store_app)


@pytest_asyncio.fixture
async def store_client(mock_store_transport):
    client = StoreApiClient(STORE_URL, transport=mock_store_transport)
    yield client
    await client.close()
