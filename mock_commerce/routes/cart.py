"""Cart API routes for the mock commerce service"""

from fastapi import APIRouter, HTTPException, Depends, Header
from typing import Optional

from storefront.models.cart import (
    Cart,
    AddToCartRequest,
    UpdateCartItemRequest,
    ApplyCouponRequest,
)
from ..database.carts import cart_db
from ..database.products import product_db

router = APIRouter(prefix="/api/v1/cart", tags=["Cart"])


def get_session(authorization: Optional[str] = Header(None)) -> str:
    """Carts are keyed by the customer's bearer token"""
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
        if token:
            return token
    return "anonymous"


@router.get("", response_model=Cart)
async def get_cart(session: str = Depends(get_session)):
    """Get the customer's cart"""
    return cart_db.get_cart(session)


@router.delete("", response_model=Cart)
async def clear_cart(session: str = Depends(get_session)):
    """Clear all items from cart"""
    return cart_db.clear_cart(session)


@router.post("/items", response_model=Cart)
async def add_to_cart(
    request: AddToCartRequest,
    session: str = Depends(get_session),
):
    """Add an item to the cart"""
    try:
        product_id = int(request.product_id)
    except (TypeError, ValueError):
        raise HTTPException(status_code=404, detail="Product not found")

    product = product_db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    return cart_db.add_item(session, product, request.quantity, request.variant_id)


@router.put("/items/{item_id}", response_model=Cart)
async def update_cart_item(
    item_id: int,
    request: UpdateCartItemRequest,
    session: str = Depends(get_session),
):
    """Update item quantity in cart"""
    updated_cart = cart_db.update_item_quantity(session, item_id, request.quantity)
    if not updated_cart:
        raise HTTPException(status_code=404, detail="Item not in cart")
    return updated_cart


@router.delete("/items/{item_id}", response_model=Cart)
async def remove_from_cart(
    item_id: int,
    session: str = Depends(get_session),
):
    """Remove an item from the cart"""
    updated_cart = cart_db.remove_item(session, item_id)
    if not updated_cart:
        raise HTTPException(status_code=404, detail="Item not in cart")
    return updated_cart


@router.post("/coupon", response_model=Cart)
async def apply_coupon(
    request: ApplyCouponRequest,
    session: str = Depends(get_session),
):
    """Apply a coupon code to the cart"""
    updated_cart = cart_db.apply_coupon(session, request.code)
    if not updated_cart:
        raise HTTPException(status_code=400, detail="Invalid coupon code")
    return updated_cart


@router.delete("/coupon", response_model=Cart)
async def remove_coupon(session: str = Depends(get_session)):
    """Remove the applied coupon"""
    return cart_db.remove_coupon(session)
