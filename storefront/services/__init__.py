# Storefront services

from .commerce_client import CommerceClient, CommerceAPIError, CommerceUnavailableError
from .cart_manager import CartManager, CartAPI
from .mutex import Mutex

__all__ = [
    "CommerceClient",
    "CommerceAPIError",
    "CommerceUnavailableError",
    "CartManager",
    "CartAPI",
    "Mutex",
]
