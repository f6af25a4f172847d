"""Cart models shared by the storefront client and the mock commerce service"""

from pydantic import BaseModel, Field
from typing import Optional, Union

ItemId = Union[int, str]
ProductId = Union[int, str]


class CartItem(BaseModel):
    """Line item in a shopping cart"""
    id: ItemId
    product_id: ProductId
    product_name: str
    price: int = Field(ge=0)  # unit price in minor currency units
    quantity: int = Field(gt=0)
    image: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    variant_id: Optional[ItemId] = None

    class Config:
        frozen = True

    @property
    def line_total(self) -> int:
        return self.price * self.quantity


class Cart(BaseModel):
    """Shopping cart with its computed totals"""
    items: list[CartItem] = []
    subtotal: int = 0
    discount: int = Field(default=0, ge=0)
    shipping: int = Field(default=0, ge=0)
    total: int = 0
    coupon_code: Optional[str] = None
    item_count: int = 0

    class Config:
        frozen = True

    def find_item(self, item_id: ItemId) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def find_product(self, product_id: ProductId) -> Optional[CartItem]:
        return next((item for item in self.items if item.product_id == product_id), None)

    @property
    def is_consistent(self) -> bool:
        """Check the total and item count invariants"""
        return (
            self.total == self.subtotal - self.discount + self.shipping
            and self.item_count == sum(item.quantity for item in self.items)
            and self.subtotal == sum(item.line_total for item in self.items)
        )


class Variant(BaseModel):
    """Size/color selection passed along with an add-to-cart"""
    id: Optional[ItemId] = None
    size: Optional[str] = None
    color: Optional[str] = None


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    product_id: ProductId
    quantity: int = Field(default=1, gt=0)
    variant_id: Optional[ItemId] = None


class UpdateCartItemRequest(BaseModel):
    """Request to update cart item quantity"""
    quantity: int = Field(gt=0)


class ApplyCouponRequest(BaseModel):
    """Request to apply a coupon code"""
    code: str = Field(min_length=1)


EMPTY_CART = Cart()

# Demo cart shown when the backend cannot be reached in development
MOCK_CART = Cart(
    items=[
        CartItem(
            id=1,
            product_id=15,
            product_name="Silk Evening Gown",
            price=5999,
            quantity=1,
            image="/products/gown-1.jpg",
            size="M",
            color="Burgundy",
        ),
        CartItem(
            id=2,
            product_id=23,
            product_name="Velvet Blazer",
            price=3999,
            quantity=2,
            image="/products/blazer-1.jpg",
            size="L",
            color="Navy",
        ),
    ],
    subtotal=13997,
    discount=0,
    shipping=0,
    total=13997,
    coupon_code=None,
    item_count=3,
)
