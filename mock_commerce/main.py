"""
Mock Commerce Application

A stand-in for the commerce service used by the storefront in local
development and in integration tests. Serves the catalog and per-customer
carts with server-side totals and coupons.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from storefront.core.config import settings
from .routes import products_router, categories_router, cart_router

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Mock Commerce starting up...")
    logger.info(f"Environment: {settings.environment}")
    yield
    logger.info("Mock Commerce shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Mock Commerce",
    description="Simulated commerce service for storefront development",
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

# Include API routers
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(cart_router)


@app.get("/")
async def home():
    return {
        "message": "Mock Commerce API",
        "docs": "/docs",
        "endpoints": {
            "products": "/api/v1/products",
            "categories": "/api/v1/categories",
            "cart": "/api/v1/cart",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "mock-commerce"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mock_commerce.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
