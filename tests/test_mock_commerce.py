"""
Integration tests: CommerceClient and CartManager against the mock commerce app
"""

import uuid

import httpx
import pytest
import pytest_asyncio

from mock_commerce.main import app
from mock_commerce.database.carts import CartDatabase
from storefront.models.cart import EMPTY_CART
from storefront.services.cart_manager import CartManager
from storefront.services.commerce_client import CommerceClient, CommerceAPIError


@pytest_asyncio.fixture
async def client():
    """Client with a fresh customer session"""
    commerce = CommerceClient(
        "http://commerce.test",
        access_token=f"test-{uuid.uuid4()}",
        transport=httpx.ASGITransport(app=app),
    )
    yield commerce
    await commerce.close()


@pytest.mark.asyncio
async def test_new_session_has_empty_cart(client):
    assert await client.get() == EMPTY_CART


@pytest.mark.asyncio
async def test_server_recomputes_totals(client):
    cart = await client.add_item(15, quantity=1)

    assert cart.subtotal == 5999
    assert cart.shipping == CartDatabase.SHIPPING_FEE
    assert cart.total == 5999 + CartDatabase.SHIPPING_FEE
    assert cart.is_consistent

    cart = await client.add_item(23, quantity=2)

    assert cart.subtotal == 13997
    assert cart.shipping == 0
    assert cart.item_count == 3
    assert cart.is_consistent


@pytest.mark.asyncio
async def test_adding_same_product_increments(client):
    await client.add_item(15)
    cart = await client.add_item(15, quantity=2)

    assert len(cart.items) == 1
    assert cart.items[0].quantity == 3


@pytest.mark.asyncio
async def test_sessions_are_isolated(client):
    await client.add_item(15)

    async with CommerceClient(
        "http://commerce.test",
        access_token=f"other-{uuid.uuid4()}",
        transport=httpx.ASGITransport(app=app),
    ) as other:
        assert await other.get() == EMPTY_CART


@pytest.mark.asyncio
async def test_unknown_product_is_404(client):
    with pytest.raises(CommerceAPIError) as exc_info:
        await client.add_item(9999)

    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "Product not found"


@pytest.mark.asyncio
async def test_unknown_item_is_404(client):
    with pytest.raises(CommerceAPIError) as exc_info:
        await client.update_item(9999, 2)

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_coupons(client):
    await client.add_item(15)

    cart = await client.apply_coupon("WELCOME10")
    assert cart.coupon_code == "WELCOME10"
    assert cart.discount == 599
    assert cart.is_consistent

    cart = await client.apply_coupon("FREESHIP")
    assert cart.discount == cart.shipping
    assert cart.total == cart.subtotal

    cart = await client.remove_coupon()
    assert cart.coupon_code is None
    assert cart.discount == 0


@pytest.mark.asyncio
async def test_invalid_coupon_is_400(client):
    with pytest.raises(CommerceAPIError) as exc_info:
        await client.apply_coupon("BADCODE")

    assert exc_info.value.status_code == 400
    assert str(exc_info.value) == "Invalid coupon code"


@pytest.mark.asyncio
async def test_cart_manager_session(client):
    manager = CartManager(client, mock_fallback=False)

    cart = await manager.add_item(15)
    item_id = cart.items[0].id
    cart = await manager.add_item(23, quantity=2)
    cart = await manager.update_quantity(item_id, 2)
    assert cart.item_count == 4
    assert cart.is_consistent

    cart = await manager.apply_coupon("WELCOME10")
    assert manager.cart.discount == cart.subtotal * 10 // 100

    with pytest.raises(CommerceAPIError):
        await manager.apply_coupon("NOPE")
    assert manager.cart == cart

    cart = await manager.remove_item(item_id)
    assert cart.find_item(item_id) is None
    assert cart.is_consistent

    await manager.clear_cart()
    assert manager.cart == EMPTY_CART
    assert await client.get() == EMPTY_CART


@pytest.mark.asyncio
async def test_catalog_routes(client):
    products = await client.list_products(category="women")
    assert {p.category for p in products.items} <= {"women", "dresses", "outerwear"}
    assert products.total == 3

    gown = await client.get_product_by_slug("silk-evening-gown")
    assert gown.id == 15
    assert (await client.get_product(15)).name == "Silk Evening Gown"

    featured = await client.get_featured(limit=2)
    assert len(featured) == 2
    assert all(p.is_featured for p in featured)

    arrivals = await client.get_new_arrivals()
    assert arrivals[0].slug == "satin-slip-dress"

    found = await client.search_products("velvet")
    assert [p.id for p in found.items] == [23]


@pytest.mark.asyncio
async def test_category_routes(client):
    categories = await client.list_categories()
    assert len(categories) == 6

    tree = await client.get_category_tree()
    women = next(c for c in tree if c.slug == "women")
    assert {c.slug for c in women.children} == {"dresses", "outerwear"}

    assert (await client.get_category_by_slug("men")).id == 2
    assert (await client.get_category(3)).parent_id == 1
