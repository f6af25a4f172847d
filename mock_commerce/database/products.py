"""Mock catalog database"""

from datetime import datetime
from typing import Optional

from storefront.models.product import Product, Category

# Mock category list; children are attached when the tree is built
CATEGORIES: dict[int, Category] = {
    1: Category(id=1, slug="women", name="Women"),
    2: Category(id=2, slug="men", name="Men"),
    3: Category(id=3, slug="dresses", name="Dresses", parent_id=1),
    4: Category(id=4, slug="outerwear", name="Outerwear", parent_id=1),
    5: Category(id=5, slug="tailoring", name="Tailoring", parent_id=2),
    6: Category(id=6, slug="knitwear", name="Knitwear", parent_id=2),
}

# Mock product catalog, prices in cents
PRODUCTS: dict[int, Product] = {
    15: Product(
        id=15,
        slug="silk-evening-gown",
        name="Silk Evening Gown",
        description="Bias-cut mulberry silk gown with a cowl neckline.",
        price=5999,
        category="dresses",
        image="/products/gown-1.jpg",
        sizes=["XS", "S", "M", "L"],
        colors=["Burgundy", "Black"],
        is_featured=True,
        created_at=datetime(2024, 9, 2),
    ),
    23: Product(
        id=23,
        slug="velvet-blazer",
        name="Velvet Blazer",
        description="Single-breasted cotton velvet blazer, half lined.",
        price=3999,
        category="tailoring",
        image="/products/blazer-1.jpg",
        sizes=["S", "M", "L", "XL"],
        colors=["Navy", "Emerald"],
        is_featured=True,
        created_at=datetime(2024, 10, 14),
    ),
    31: Product(
        id=31,
        slug="wool-wrap-coat",
        name="Wool Wrap Coat",
        description="Double-faced wool coat with a tie belt.",
        price=12900,
        category="outerwear",
        image="/products/coat-1.jpg",
        sizes=["S", "M", "L"],
        colors=["Camel"],
        created_at=datetime(2024, 11, 1),
    ),
    38: Product(
        id=38,
        slug="cashmere-crew-sweater",
        name="Cashmere Crew Sweater",
        description="Mid-weight cashmere crew neck in a relaxed fit.",
        price=8900,
        category="knitwear",
        image="/products/sweater-1.jpg",
        sizes=["M", "L", "XL"],
        colors=["Oatmeal", "Charcoal"],
        is_featured=True,
        created_at=datetime(2024, 8, 20),
    ),
    44: Product(
        id=44,
        slug="satin-slip-dress",
        name="Satin Slip Dress",
        description="Midi slip dress with adjustable straps.",
        price=4599,
        category="dresses",
        image="/products/slip-1.jpg",
        sizes=["XS", "S", "M"],
        colors=["Champagne", "Black"],
        created_at=datetime(2024, 11, 18),
    ),
}


class ProductDatabase:
    """In-memory catalog"""

    def __init__(self):
        self.products = PRODUCTS
        self.categories = CATEGORIES

    def get_product(self, product_id: int) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def get_product_by_slug(self, slug: str) -> Optional[Product]:
        return next((p for p in self.products.values() if p.slug == slug), None)

    def search_products(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        """
        Search products with filters.

        Returns:
            Tuple of (products, total_count)
        """
        results = list(self.products.values())

        if query:
            query_lower = query.lower()
            results = [
                p for p in results
                if query_lower in p.name.lower() or query_lower in p.description.lower()
            ]

        if category:
            # A parent category matches its subcategories too
            slugs = {category} | {
                c.slug for c in self.categories.values()
                if c.parent_id is not None and self.categories[c.parent_id].slug == category
            }
            results = [p for p in results if p.category in slugs]

        if min_price is not None:
            results = [p for p in results if p.price >= min_price]

        if max_price is not None:
            results = [p for p in results if p.price <= max_price]

        total = len(results)
        return results[offset:offset + limit], total

    def get_featured(self, limit: int = 8) -> list[Product]:
        return [p for p in self.products.values() if p.is_featured][:limit]

    def get_new_arrivals(self, limit: int = 8) -> list[Product]:
        """Newest products first"""
        dated = [p for p in self.products.values() if p.created_at]
        return sorted(dated, key=lambda p: p.created_at, reverse=True)[:limit]

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.categories.get(category_id)

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        return next((c for c in self.categories.values() if c.slug == slug), None)

    def list_categories(self) -> list[Category]:
        return list(self.categories.values())

    def get_category_tree(self) -> list[Category]:
        """Top-level categories with their children nested"""
        return [
            root.model_copy(update={
                "children": [c for c in self.categories.values() if c.parent_id == root.id],
            })
            for root in self.categories.values()
            if root.parent_id is None
        ]


# Singleton instance
product_db = ProductDatabase()
