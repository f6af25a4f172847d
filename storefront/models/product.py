"""Catalog models"""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional, Union


class Product(BaseModel):
    """Product in the catalog"""
    id: Union[int, str]
    slug: str
    name: str
    description: str = ""
    price: int = Field(ge=0)
    currency: str = "USD"
    category: str
    image: Optional[str] = None
    sizes: list[str] = []
    colors: list[str] = []
    is_featured: bool = False
    created_at: Optional[datetime] = None


class ProductList(BaseModel):
    """Page of products"""
    items: list[Product]
    total: int
    limit: int
    offset: int


class Category(BaseModel):
    """Product category, optionally with its subcategories"""
    id: Union[int, str]
    slug: str
    name: str
    parent_id: Optional[Union[int, str]] = None
    children: list["Category"] = []
