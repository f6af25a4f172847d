"""
Cart Manager

Owns the customer's cart state between the UI and the commerce service:
1. Loads the cart once (or on forced refresh) behind a FIFO mutex
2. Sends every mutation to the cart API and adopts the server's cart
3. Falls back to an equivalent local update when the API is unreachable
4. Notifies subscribers whenever the cart, loading flag or drawer changes
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional, Protocol, TypeVar, Union

from pydantic import ValidationError

from ..core.config import settings
from ..models.cart import Cart, CartItem, Variant, EMPTY_CART, MOCK_CART
from .commerce_client import CommerceAPIError, CommerceUnavailableError
from .mutex import Mutex

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Failures of the remote call that the fallback paths recover from
REMOTE_ERRORS = (CommerceAPIError, ValidationError)

PLACEHOLDER_NAME = "New Product"
PLACEHOLDER_PRICE = 2999
PLACEHOLDER_IMAGE = "/products/placeholder.jpg"


class CartAPI(Protocol):
    """Remote cart operations; every call except clear() returns the full cart"""

    async def get(self) -> Cart: ...

    async def add_item(
        self,
        product_id: Union[int, str],
        quantity: int = 1,
        variant_id: Optional[Union[int, str]] = None,
    ) -> Cart: ...

    async def update_item(self, item_id: Union[int, str], quantity: int) -> Cart: ...

    async def remove_item(self, item_id: Union[int, str]) -> Cart: ...

    async def clear(self) -> None: ...

    async def apply_coupon(self, code: str) -> Cart: ...

    async def remove_coupon(self) -> Cart: ...


Observer = Callable[["CartManager"], None]


# ==================== Local cart transitions ====================

def _local_item_id(cart: Cart) -> int:
    """Millisecond timestamp, bumped until it is unused in the cart"""
    item_id = int(time.time() * 1000)
    taken = {item.id for item in cart.items}
    while item_id in taken:
        item_id += 1
    return item_id


def apply_add(
    cart: Cart,
    product_id: Union[int, str],
    quantity: int,
    variant: Optional[Variant] = None,
) -> Cart:
    """Add ``quantity`` of a product to the cart without asking the server"""
    existing = cart.find_product(product_id)

    if existing:
        delta = existing.price * quantity
        items = [
            item.model_copy(update={"quantity": item.quantity + quantity})
            if item.id == existing.id else item
            for item in cart.items
        ]
    else:
        new_item = CartItem(
            id=_local_item_id(cart),
            product_id=product_id,
            product_name=PLACEHOLDER_NAME,
            price=PLACEHOLDER_PRICE,
            quantity=quantity,
            image=PLACEHOLDER_IMAGE,
            size=variant.size if variant else None,
            color=variant.color if variant else None,
            variant_id=variant.id if variant else None,
        )
        delta = new_item.line_total
        items = [*cart.items, new_item]

    return cart.model_copy(update={
        "items": items,
        "item_count": cart.item_count + quantity,
        "subtotal": cart.subtotal + delta,
        "total": cart.total + delta,
    })


def apply_quantity(cart: Cart, item_id: Union[int, str], quantity: int) -> Cart:
    """Set an item's quantity; unknown items leave the cart untouched"""
    item = cart.find_item(item_id)
    if not item:
        return cart

    diff = quantity - item.quantity
    return cart.model_copy(update={
        "items": [
            i.model_copy(update={"quantity": quantity}) if i.id == item_id else i
            for i in cart.items
        ],
        "item_count": cart.item_count + diff,
        "subtotal": cart.subtotal + item.price * diff,
        "total": cart.total + item.price * diff,
    })


def apply_remove(cart: Cart, item_id: Union[int, str]) -> Cart:
    """Drop an item; unknown items leave the cart untouched"""
    item = cart.find_item(item_id)
    if not item:
        return cart

    return cart.model_copy(update={
        "items": [i for i in cart.items if i.id != item_id],
        "item_count": cart.item_count - item.quantity,
        "subtotal": cart.subtotal - item.line_total,
        "total": cart.total - item.line_total,
    })


def _check_quantity(quantity: Any) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValueError(f"Quantity must be a positive integer, got {quantity!r}")


# ==================== Manager ====================

class CartManager:
    """
    Single owner of the cart state.

    All mutations, including the fetch, run one at a time through a FIFO
    mutex, so each operation starts from the result of the one before it.
    Coupon operations have no local fallback: their failures reach the caller.

    Usage:
        manager = CartManager(CommerceClient.from_settings())
        unsubscribe = manager.subscribe(render)
        await manager.add_item(15, quantity=2, variant=Variant(size="M"))
    """

    def __init__(
        self,
        api: CartAPI,
        mock_fallback: Optional[bool] = None,
        request_timeout: Optional[float] = None,
    ):
        """
        Initialize cart manager.

        Args:
            api: Remote cart API
            mock_fallback: Show the demo cart when the first fetch fails
                (defaults to the development setting)
            request_timeout: Seconds to wait for any single cart API call
        """
        self.api = api
        self.mock_fallback = settings.use_mock_cart if mock_fallback is None else mock_fallback
        self.request_timeout = (
            settings.cart_request_timeout if request_timeout is None else request_timeout
        )

        self._cart: Cart = EMPTY_CART
        self._loading = False
        self._has_fetched = False
        self._is_open = False
        self._fetching = False
        self._mutex = Mutex()
        self._observers: list[Observer] = []

    # ==================== State ====================

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def has_fetched(self) -> bool:
        return self._has_fetched

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def item_count(self) -> int:
        return self._cart.item_count if self._cart else 0

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register a callback for state changes; returns an unsubscribe function"""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self)
            except Exception:
                logger.exception("Cart observer failed")

    def _set_cart(self, cart: Cart) -> None:
        if cart is not self._cart:
            self._cart = cart
            self._notify()

    def _set_loading(self, loading: bool) -> None:
        if loading != self._loading:
            self._loading = loading
            self._notify()

    def _set_open(self, is_open: bool) -> None:
        if is_open != self._is_open:
            self._is_open = is_open
            self._notify()

    async def _call(self, operation: str, call: Awaitable[T]) -> T:
        """Await a cart API call, bounded by the request timeout"""
        try:
            return await asyncio.wait_for(call, timeout=self.request_timeout)
        except asyncio.TimeoutError as e:
            raise CommerceUnavailableError(
                f"Cart {operation} timed out after {self.request_timeout}s"
            ) from e

    # ==================== Loading ====================

    async def fetch_cart(self, force: bool = False) -> Cart:
        """
        Load the cart from the server.

        Does nothing while another fetch is in flight, or when the cart was
        already loaded and ``force`` is False. API failures are never raised:
        the demo cart (development) or the empty cart takes the server's place.
        """
        if self._fetching:
            return self._cart
        if self._has_fetched and not force:
            return self._cart

        self._fetching = True
        try:
            async with self._mutex:
                if self._has_fetched and not force:
                    return self._cart
                self._set_loading(True)
                try:
                    cart = await self._call("fetch", self.api.get())
                except REMOTE_ERRORS as e:
                    cart = MOCK_CART if self.mock_fallback else EMPTY_CART
                    logger.warning(
                        f"Cart fetch failed, using {'mock' if self.mock_fallback else 'empty'} cart: {e}"
                    )
                self._set_cart(cart)
        finally:
            self._has_fetched = True
            self._fetching = False
            self._set_loading(False)

        return self._cart

    async def refresh_cart(self) -> Cart:
        """Reload the cart from the server, discarding local adjustments"""
        return await self.fetch_cart(force=True)

    # ==================== Mutations ====================

    async def add_item(
        self,
        product_id: Union[int, str],
        quantity: int = 1,
        variant: Optional[Union[Variant, dict]] = None,
    ) -> Cart:
        """Add a product to the cart and open the drawer"""
        _check_quantity(quantity)
        if isinstance(variant, dict):
            variant = Variant.model_validate(variant)

        if not self._has_fetched:
            await self.fetch_cart()

        async with self._mutex:
            try:
                cart = await self._call(
                    "add",
                    self.api.add_item(product_id, quantity, variant.id if variant else None),
                )
            except REMOTE_ERRORS as e:
                logger.warning(f"Add to cart failed, updating locally: {e}")
                cart = apply_add(self._cart, product_id, quantity, variant)
            self._set_cart(cart)

        self._set_open(True)
        return cart

    async def update_quantity(self, item_id: Union[int, str], quantity: int) -> Cart:
        """Set the quantity of a cart item"""
        _check_quantity(quantity)

        async with self._mutex:
            try:
                cart = await self._call("update", self.api.update_item(item_id, quantity))
            except REMOTE_ERRORS as e:
                logger.warning(f"Quantity update failed, updating locally: {e}")
                cart = apply_quantity(self._cart, item_id, quantity)
            self._set_cart(cart)

        return cart

    async def remove_item(self, item_id: Union[int, str]) -> Cart:
        """Remove an item from the cart"""
        async with self._mutex:
            try:
                cart = await self._call("remove", self.api.remove_item(item_id))
            except REMOTE_ERRORS as e:
                logger.warning(f"Remove from cart failed, updating locally: {e}")
                cart = apply_remove(self._cart, item_id)
            self._set_cart(cart)

        return cart

    async def clear_cart(self) -> Cart:
        """Empty the cart; the local cart is emptied even if the server call fails"""
        async with self._mutex:
            try:
                await self._call("clear", self.api.clear())
            except REMOTE_ERRORS as e:
                logger.warning(f"Clear cart failed on server: {e}")
            self._set_cart(EMPTY_CART)

        return EMPTY_CART

    async def apply_coupon(self, code: str) -> Cart:
        """Apply a coupon code; raises if the server rejects it"""
        if not code or not code.strip():
            raise ValueError("Coupon code is required")

        async with self._mutex:
            try:
                cart = await self._call("coupon", self.api.apply_coupon(code.strip()))
            except REMOTE_ERRORS as e:
                logger.error(f"Error applying coupon {code!r}: {e}")
                raise
            self._set_cart(cart)

        return cart

    async def remove_coupon(self) -> Cart:
        """Remove the applied coupon; raises if the server call fails"""
        async with self._mutex:
            try:
                cart = await self._call("coupon", self.api.remove_coupon())
            except REMOTE_ERRORS as e:
                logger.error(f"Error removing coupon: {e}")
                raise
            self._set_cart(cart)

        return cart

    # ==================== Drawer ====================

    async def open_cart(self) -> None:
        """Open the drawer, loading the cart the first time"""
        self._set_open(True)
        if not self._has_fetched:
            await self.fetch_cart()

    def close_cart(self) -> None:
        self._set_open(False)

    async def toggle_cart(self) -> None:
        """Flip the drawer, loading the cart when it opens for the first time"""
        self._set_open(not self._is_open)
        if self._is_open and not self._has_fetched:
            await self.fetch_cart()
