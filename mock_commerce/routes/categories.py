"""Category API routes for the mock commerce service"""

from fastapi import APIRouter, HTTPException

from storefront.models.product import Category
from ..database.products import product_db

router = APIRouter(prefix="/api/v1/categories", tags=["Categories"])


@router.get("", response_model=list[Category])
async def list_categories():
    """List all categories"""
    return product_db.list_categories()


@router.get("/tree", response_model=list[Category])
async def get_category_tree():
    return product_db.get_category_tree()


@router.get("/slug/{slug}", response_model=Category)
async def get_category_by_slug(slug: str):
    category = product_db.get_category_by_slug(slug)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.get("/{category_id}", response_model=Category)
async def get_category(category_id: int):
    category = product_db.get_category(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category
