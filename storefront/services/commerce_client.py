"""
Commerce API Client

HTTP client for the commerce service that owns carts, products and categories.
Adds the customer's bearer token to every request when one is configured.
"""

import logging
from typing import Optional, Any, Union

import httpx

from ..core.config import settings
from ..models.cart import (
    Cart,
    AddToCartRequest,
    UpdateCartItemRequest,
    ApplyCouponRequest,
)
from ..models.product import Product, ProductList, Category

logger = logging.getLogger(__name__)


class CommerceAPIError(Exception):
    """Request to the commerce service failed"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.data = data


class CommerceUnavailableError(CommerceAPIError):
    """Commerce service could not be reached or did not answer in time"""
    pass


class CommerceClient:
    """
    Client for the commerce service.

    Implements the cart API consumed by CartManager plus the catalog reads
    used by product pages.

    Usage:
        async with CommerceClient.from_settings() as client:
            cart = await client.get()
            cart = await client.add_item(15, quantity=2)
    """

    def __init__(
        self,
        base_url: str,
        access_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize commerce client.

        Args:
            base_url: Base URL of the commerce service
            access_token: Customer access token sent as a bearer token
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used to talk to an in-process app)
        """
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, **kwargs) -> "CommerceClient":
        """Create client from application settings"""
        kwargs.setdefault("access_token", settings.access_token)
        kwargs.setdefault("timeout", settings.request_timeout)
        return cls(settings.commerce_base_url, **kwargs)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "CommerceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _generate_headers(self) -> dict[str, str]:
        """Generate headers including the bearer token if available"""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            return response.json()
        return response.text

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request and decode the response"""
        url = f"{self.base_url}{path}"

        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=self._generate_headers(),
                json=body,
                params=params or None,
            )
        except httpx.TransportError as e:
            logger.error(f"Request failed: {method} {url} - {e!r}")
            raise CommerceUnavailableError(f"Commerce service unavailable: {e}") from e

        try:
            data = self._parse_body(response)
        except ValueError as e:
            logger.error(f"Malformed response: {method} {url} - {e}")
            raise CommerceAPIError(
                f"Malformed response from commerce service: {e}",
                status_code=response.status_code,
                data=response.text,
            ) from e

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            message = None
            if isinstance(data, dict):
                message = data.get("detail") or data.get("message")
            raise CommerceAPIError(
                message if isinstance(message, str) else f"Request failed: {response.status_code}",
                status_code=response.status_code,
                data=data,
            )

        return data

    # ==================== Cart APIs ====================

    async def get(self) -> Cart:
        """Get the customer's cart"""
        return Cart.model_validate(await self._request("GET", "/api/v1/cart"))

    async def add_item(
        self,
        product_id: Union[int, str],
        quantity: int = 1,
        variant_id: Optional[Union[int, str]] = None,
    ) -> Cart:
        """Add item to cart"""
        body = AddToCartRequest(
            product_id=product_id,
            quantity=quantity,
            variant_id=variant_id,
        )
        data = await self._request("POST", "/api/v1/cart/items", body=body.model_dump())
        return Cart.model_validate(data)

    async def update_item(self, item_id: Union[int, str], quantity: int) -> Cart:
        """Update item quantity in cart"""
        body = UpdateCartItemRequest(quantity=quantity)
        data = await self._request(
            "PUT",
            f"/api/v1/cart/items/{item_id}",
            body=body.model_dump(),
        )
        return Cart.model_validate(data)

    async def remove_item(self, item_id: Union[int, str]) -> Cart:
        """Remove item from cart"""
        data = await self._request("DELETE", f"/api/v1/cart/items/{item_id}")
        return Cart.model_validate(data)

    async def clear(self) -> None:
        """Remove every item from the cart"""
        await self._request("DELETE", "/api/v1/cart")

    async def apply_coupon(self, code: str) -> Cart:
        """Validate and apply a coupon code"""
        body = ApplyCouponRequest(code=code)
        data = await self._request("POST", "/api/v1/cart/coupon", body=body.model_dump())
        return Cart.model_validate(data)

    async def remove_coupon(self) -> Cart:
        """Remove the applied coupon"""
        return Cart.model_validate(await self._request("DELETE", "/api/v1/cart/coupon"))

    # ==================== Product APIs ====================

    async def list_products(self, **filters: Any) -> ProductList:
        """List products; empty filters are not sent"""
        data = await self._request("GET", "/api/v1/products", params=filters)
        return ProductList.model_validate(data)

    async def get_product(self, product_id: Union[int, str]) -> Product:
        """Get product details"""
        return Product.model_validate(
            await self._request("GET", f"/api/v1/products/{product_id}")
        )

    async def get_product_by_slug(self, slug: str) -> Product:
        return Product.model_validate(
            await self._request("GET", f"/api/v1/products/slug/{slug}")
        )

    async def get_featured(self, limit: int = 8) -> list[Product]:
        data = await self._request("GET", "/api/v1/products/featured", params={"limit": limit})
        return [Product.model_validate(p) for p in data]

    async def get_new_arrivals(self, limit: int = 8) -> list[Product]:
        data = await self._request(
            "GET", "/api/v1/products/new-arrivals", params={"limit": limit}
        )
        return [Product.model_validate(p) for p in data]

    async def search_products(self, query: str, **filters: Any) -> ProductList:
        """Full-text product search"""
        data = await self._request(
            "GET",
            "/api/v1/products/search",
            params={"q": query, **filters},
        )
        return ProductList.model_validate(data)

    # ==================== Category APIs ====================

    async def list_categories(self) -> list[Category]:
        data = await self._request("GET", "/api/v1/categories")
        return [Category.model_validate(c) for c in data]

    async def get_category(self, category_id: Union[int, str]) -> Category:
        return Category.model_validate(
            await self._request("GET", f"/api/v1/categories/{category_id}")
        )

    async def get_category_by_slug(self, slug: str) -> Category:
        return Category.model_validate(
            await self._request("GET", f"/api/v1/categories/slug/{slug}")
        )

    async def get_category_tree(self) -> list[Category]:
        """Get top-level categories with nested children"""
        data = await self._request("GET", "/api/v1/categories/tree")
        return [Category.model_validate(c) for c in data]
