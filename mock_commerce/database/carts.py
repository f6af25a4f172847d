"""Cart storage for the mock commerce service"""

from typing import Optional, Union

from storefront.models.cart import Cart, CartItem, EMPTY_CART
from storefront.models.product import Product


class CartDatabase:
    """In-memory carts, one per customer session"""

    SHIPPING_FEE = 995
    FREE_SHIPPING_THRESHOLD = 10000
    COUPONS = {
        "WELCOME10": "percent_10",
        "FREESHIP": "free_shipping",
    }

    def __init__(self):
        self.carts: dict[str, Cart] = {}
        self._next_item_id = 1

    def get_cart(self, session: str) -> Cart:
        """Get the session's cart; sessions start with an empty cart"""
        return self.carts.get(session, EMPTY_CART)

    def add_item(
        self,
        session: str,
        product: Product,
        quantity: int = 1,
        variant_id: Optional[Union[int, str]] = None,
    ) -> Cart:
        """Add an item to the cart"""
        cart = self.get_cart(session)

        existing_item = next(
            (
                item for item in cart.items
                if item.product_id == product.id and item.variant_id == variant_id
            ),
            None,
        )

        if existing_item:
            items = [
                item.model_copy(update={"quantity": item.quantity + quantity})
                if item is existing_item else item
                for item in cart.items
            ]
        else:
            cart_item = CartItem(
                id=self._next_item_id,
                product_id=product.id,
                product_name=product.name,
                price=product.price,
                quantity=quantity,
                image=product.image,
                variant_id=variant_id,
            )
            self._next_item_id += 1
            items = [*cart.items, cart_item]

        return self._save(session, cart, items)

    def update_item_quantity(
        self,
        session: str,
        item_id: int,
        quantity: int,
    ) -> Optional[Cart]:
        """Update item quantity in cart; None when the item is not there"""
        cart = self.get_cart(session)
        if not cart.find_item(item_id):
            return None

        items = [
            item.model_copy(update={"quantity": quantity}) if item.id == item_id else item
            for item in cart.items
        ]
        return self._save(session, cart, items)

    def remove_item(self, session: str, item_id: int) -> Optional[Cart]:
        """Remove an item from the cart; None when the item is not there"""
        cart = self.get_cart(session)
        if not cart.find_item(item_id):
            return None
        return self._save(session, cart, [i for i in cart.items if i.id != item_id])

    def clear_cart(self, session: str) -> Cart:
        """Clear all items and the coupon"""
        self.carts.pop(session, None)
        return EMPTY_CART

    def apply_coupon(self, session: str, code: str) -> Optional[Cart]:
        """Apply a coupon; None when the code is unknown"""
        code = code.strip().upper()
        if code not in self.COUPONS:
            return None
        cart = self.get_cart(session).model_copy(update={"coupon_code": code})
        return self._save(session, cart, cart.items)

    def remove_coupon(self, session: str) -> Cart:
        cart = self.get_cart(session).model_copy(update={"coupon_code": None})
        return self._save(session, cart, cart.items)

    def _save(self, session: str, cart: Cart, items: list[CartItem]) -> Cart:
        """Recalculate cart totals and store the new cart"""
        subtotal = sum(item.line_total for item in items)

        if not items or subtotal >= self.FREE_SHIPPING_THRESHOLD:
            shipping = 0
        else:
            shipping = self.SHIPPING_FEE

        discount = 0
        rule = self.COUPONS.get(cart.coupon_code) if cart.coupon_code else None
        if rule == "percent_10":
            discount = subtotal * 10 // 100
        elif rule == "free_shipping":
            discount = shipping

        updated = Cart(
            items=items,
            subtotal=subtotal,
            discount=discount,
            shipping=shipping,
            total=subtotal - discount + shipping,
            coupon_code=cart.coupon_code,
            item_count=sum(item.quantity for item in items),
        )
        self.carts[session] = updated
        return updated


# Singleton instance
cart_db = CartDatabase()
