# Storefront Models

from .cart import (
    Cart,
    CartItem,
    Variant,
    AddToCartRequest,
    UpdateCartItemRequest,
    ApplyCouponRequest,
    EMPTY_CART,
    MOCK_CART,
)
from .product import Product, ProductList, Category

__all__ = [
    "Cart",
    "CartItem",
    "Variant",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "ApplyCouponRequest",
    "EMPTY_CART",
    "MOCK_CART",
    "Product",
    "ProductList",
    "Category",
]
