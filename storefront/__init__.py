"""Storefront cart client for the commerce service"""

from .models import Cart, CartItem, Variant, EMPTY_CART, MOCK_CART
from .services import (
    CartManager,
    CommerceClient,
    CommerceAPIError,
    CommerceUnavailableError,
)

__version__ = "1.0.0"

__all__ = [
    "Cart",
    "CartItem",
    "Variant",
    "EMPTY_CART",
    "MOCK_CART",
    "CartManager",
    "CommerceClient",
    "CommerceAPIError",
    "CommerceUnavailableError",
]
