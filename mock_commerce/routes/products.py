"""Product API routes for the mock commerce service"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from storefront.models.product import Product, ProductList
from ..database.products import product_db

router = APIRouter(prefix="/api/v1/products", tags=["Products"])


@router.get("", response_model=ProductList)
async def list_products(
    category: Optional[str] = Query(None, description="Filter by category slug"),
    min_price: Optional[int] = Query(None, ge=0, description="Minimum price in cents"),
    max_price: Optional[int] = Query(None, ge=0, description="Maximum price in cents"),
    limit: int = Query(20, ge=1, le=100, description="Max results"),
    offset: int = Query(0, ge=0, description="Offset for pagination"),
):
    """List catalog products"""
    products, total = product_db.search_products(
        category=category,
        min_price=min_price,
        max_price=max_price,
        limit=limit,
        offset=offset,
    )
    return ProductList(items=products, total=total, limit=limit, offset=offset)


@router.get("/featured", response_model=list[Product])
async def get_featured(limit: int = Query(8, ge=1, le=100)):
    return product_db.get_featured(limit)


@router.get("/new-arrivals", response_model=list[Product])
async def get_new_arrivals(limit: int = Query(8, ge=1, le=100)):
    return product_db.get_new_arrivals(limit)


@router.get("/search", response_model=ProductList)
async def search_products(
    q: str = Query(..., min_length=1, description="Search query"),
    category: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    """Search product names and descriptions"""
    products, total = product_db.search_products(
        query=q,
        category=category,
        limit=limit,
        offset=offset,
    )
    return ProductList(items=products, total=total, limit=limit, offset=offset)


@router.get("/slug/{slug}", response_model=Product)
async def get_product_by_slug(slug: str):
    product = product_db.get_product_by_slug(slug)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: int):
    """Get a product by ID"""
    product = product_db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
