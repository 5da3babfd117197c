"""
Mock Store Application

A stand-in for the store backend: catalog, blog and order endpoints with
the same request and response contract the storefront consumes.
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .routes import blogs_router, orders_router, products_router

# Load environment variables
load_dotenv("config/.env")

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Mock Store starting up...")
    yield
    logger.info("Mock Store shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Mock Store",
    description="Simulated store backend for storefront development and tests",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {success: false, message}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject invalid bodies with the first problem as the message"""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    first = errors[0] if errors else {"field": "", "message": "Invalid request"}
    message = f"{first['field']}: {first['message']}" if first["field"] else first["message"]
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": message, "errors": errors},
    )


# Include API routers
app.include_router(products_router)
app.include_router(blogs_router)
app.include_router(orders_router)


@app.get("/")
async def home():
    """Mock store index"""
    return {
        "message": "Mock Store API",
        "docs": "/docs",
        "endpoints": {
            "products": "/api/products",
            "blogs": "/api/blogs",
            "orders": "/api/orders",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "mock-store"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mock_store.main:app",
        host=os.getenv("MOCK_STORE_HOST", "0.0.0.0"),
        port=int(os.getenv("MOCK_STORE_PORT", "5000")),
        reload=True,
    )
