"""
Tests for the mock commerce cart storage
"""

import pytest

from mock_commerce.database.carts import CartDatabase
from mock_commerce.database.products import product_db
from storefront.models.cart import EMPTY_CART


@pytest.fixture
def cart_db():
    return CartDatabase()


@pytest.fixture
def gown():
    return product_db.get_product(15)


def test_shipping_charged_below_threshold(cart_db, gown):
    cart = cart_db.add_item("s1", gown)

    assert cart.shipping == CartDatabase.SHIPPING_FEE
    assert cart.total == gown.price + CartDatabase.SHIPPING_FEE


def test_free_shipping_from_threshold(cart_db, gown):
    cart = cart_db.add_item("s1", gown, quantity=2)

    assert cart.subtotal >= CartDatabase.FREE_SHIPPING_THRESHOLD
    assert cart.shipping == 0


def test_variants_are_separate_lines(cart_db, gown):
    cart_db.add_item("s1", gown, variant_id="M")
    cart = cart_db.add_item("s1", gown, variant_id="L")

    assert len(cart.items) == 2
    assert cart.items[0].id != cart.items[1].id


def test_update_missing_item_returns_none(cart_db):
    assert cart_db.update_item_quantity("s1", 42, 2) is None
    assert cart_db.remove_item("s1", 42) is None


def test_coupon_codes_are_case_insensitive(cart_db, gown):
    cart_db.add_item("s1", gown)

    cart = cart_db.apply_coupon("s1", "welcome10")

    assert cart.coupon_code == "WELCOME10"
    assert cart_db.apply_coupon("s1", "NOPE") is None


def test_clear_drops_coupon(cart_db, gown):
    cart_db.add_item("s1", gown)
    cart_db.apply_coupon("s1", "WELCOME10")

    assert cart_db.clear_cart("s1") == EMPTY_CART
    assert cart_db.get_cart("s1").coupon_code is None


def test_every_cart_is_consistent(cart_db, gown):
    blazer = product_db.get_product(23)
    carts = [
        cart_db.add_item("s1", gown),
        cart_db.add_item("s1", blazer, quantity=3),
        cart_db.apply_coupon("s1", "FREESHIP"),
        cart_db.update_item_quantity("s1", 1, 4),
        cart_db.remove_item("s1", 2),
        cart_db.remove_coupon("s1"),
    ]

    assert all(cart.is_consistent for cart in carts)
