"""Pytest configuration and fixtures"""
import os
import pytest
import pytest_asyncio
from unittest.mock import AsyncMock

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("COMMERCE_BASE_URL", "http://commerce.test")
os.environ.setdefault("CART_REQUEST_TIMEOUT", "5")

from storefront.models.cart import Cart, CartItem, EMPTY_CART, MOCK_CART
from storefront.services.commerce_client import CommerceAPIError, CommerceUnavailableError
from storefront.services.cart_manager import CartManager


@pytest.fixture
def server_cart():
    """Cart as the server would return it after adding product 15"""
    return Cart(
        items=[
            CartItem(
                id=101,
                product_id=15,
                product_name="Silk Evening Gown",
                price=5999,
                quantity=1,
                image="/products/gown-1.jpg",
            )
        ],
        subtotal=5999,
        discount=0,
        shipping=995,
        total=6994,
        item_count=1,
    )


@pytest.fixture
def coupon_cart(server_cart):
    """Server cart after WELCOME10 was applied"""
    return server_cart.model_copy(update={
        "discount": 599,
        "total": 6395,
        "coupon_code": "WELCOME10",
    })


@pytest.fixture
def mock_cart_api(server_cart):
    """Cart API whose calls all succeed"""
    api = AsyncMock()
    api.get = AsyncMock(return_value=server_cart)
    api.add_item = AsyncMock(return_value=server_cart)
    api.update_item = AsyncMock(return_value=server_cart)
    api.remove_item = AsyncMock(return_value=EMPTY_CART)
    api.clear = AsyncMock(return_value=None)
    api.apply_coupon = AsyncMock(return_value=server_cart)
    api.remove_coupon = AsyncMock(return_value=server_cart)
    return api


@pytest.fixture
def failing_cart_api():
    """Cart API that cannot reach the backend"""
    api = AsyncMock()
    error = CommerceUnavailableError("Commerce service unavailable: connection refused")
    for name in (
        "get",
        "add_item",
        "update_item",
        "remove_item",
        "clear",
        "apply_coupon",
        "remove_coupon",
    ):
        setattr(api, name, AsyncMock(side_effect=error))
    return api


@pytest.fixture
def offline_manager(failing_cart_api):
    """Manager against an unreachable backend, demo cart disabled"""
    return CartManager(failing_cart_api, mock_fallback=False, request_timeout=1.0)


@pytest_asyncio.fixture
async def loaded_offline_manager(failing_cart_api):
    """Offline manager already holding the demo cart"""
    manager = CartManager(failing_cart_api, mock_fallback=True, request_timeout=1.0)
    await manager.fetch_cart()
    assert manager.cart == MOCK_CART
    return manager


@pytest.fixture
def bad_coupon_error():
    """Error the backend returns for an unknown coupon"""
    return CommerceAPIError("Invalid coupon code", status_code=400, data={"detail": "Invalid coupon code"})
