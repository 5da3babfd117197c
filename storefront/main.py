"""
Storefront Application

Client-side cart and checkout service. Holds one cart per running
instance, persists it to local storage and submits orders to the store
API.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, get_settings
from .core.storage import FileStorage, Storage
from .routes import cart_router, catalog_router, checkout_router
from .services.cart_store import CartStore
from .services.checkout import CheckoutFlow
from .services.store_client import StoreApiClient

# Load environment variables
load_dotenv("config/.env")

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the storefront app.

    Args:
        settings: Application settings (default: from environment)
        storage: Cart storage (default: FileStorage in settings.storage_dir)
        transport: httpx transport for the store client
    """
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the cart, client and checkout flow for this instance"""
        logger.info("Storefront starting up...")
        logger.info(f"Store API URL: {settings.store_api_url}")

        cart_storage = storage or FileStorage(
            settings.storage_dir,
            quota_bytes=settings.storage_quota_bytes,
        )
        cart_store = CartStore(cart_storage, storage_key=settings.cart_storage_key)
        store_client = StoreApiClient(
            settings.store_api_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

        app.state.cart_store = cart_store
        app.state.store_client = store_client
        app.state.checkout_flow = CheckoutFlow(cart_store, store_client)

        yield

        logger.info("Storefront shutting down...")
        await store_client.close()

    app = FastAPI(
        title=settings.app_name,
        description="Shopping cart and checkout for the store",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(catalog_router)

    @app.get("/")
    async def home():
        return {
            "message": "Storefront API",
            "docs": "/docs",
            "endpoints": {
                "cart": "/api/cart",
                "checkout": "/api/checkout",
                "catalog": "/api/catalog",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "storefront",
            "store_api_url": settings.store_api_url,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
