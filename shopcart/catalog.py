"""
Catalog Domain Service

Static, read-only product registry: lookup by id, listing, category listing
and text/category search. Built once at startup and never mutated.
"""

from typing import Iterable, Optional

from shopcart.errors import UnknownProductError
from shopcart.logging import get_logger
from shopcart.models import Product

logger = get_logger(__name__)

# Category filter value meaning "every category"
ALL_CATEGORIES = "All"

# Seed set; prices in rand (ZAR)
DEFAULT_PRODUCTS: tuple[tuple[str, str, str, str], ...] = (
    ("EL-001", 'Laptop 14" i5 16GB/512GB', "Electronics", "12999.00"),
    ("EL-002", 'Smartphone 6.5" 128GB', "Electronics", "6999.00"),
    ("EL-003", "Bluetooth Headphones", "Electronics", "1299.00"),
    ("EL-004", "USB-C Charger 65W", "Electronics", "499.00"),
    ("EL-005", "Mechanical Keyboard", "Electronics", "1599.00"),

    ("HM-101", "Air Fryer 5.5L", "Home", "1899.00"),
    ("HM-102", "Electric Kettle 1.7L", "Home", "399.00"),
    ("HM-103", "Vacuum Cleaner 1200W", "Home", "1499.00"),
    ("HM-104", "LED Desk Lamp", "Home", "299.00"),
    ("HM-105", "Cookware Set (5pc)", "Home", "999.00"),

    ("FS-201", "Running Shoes", "Fashion", "1299.00"),
    ("FS-202", "Denim Jacket", "Fashion", "899.00"),
    ("FS-203", "Graphic T-Shirt", "Fashion", "249.00"),
    ("FS-204", "Slim Fit Jeans", "Fashion", "599.00"),
    ("FS-205", "Baseball Cap", "Fashion", "199.00"),

    ("SP-301", "Football Size 5", "Sports", "349.00"),
    ("SP-302", "Yoga Mat", "Sports", "299.00"),
    ("SP-303", "Dumbbell 10kg", "Sports", "499.00"),
    ("SP-304", "Skipping Rope", "Sports", "149.00"),
    ("SP-305", "Water Bottle 1L", "Sports", "99.00"),

    ("BK-401", "Data Structures in Java", "Books", "799.00"),
    ("BK-402", "Python for Everyone", "Books", "699.00"),
    ("BK-403", "Clean Code", "Books", "899.00"),
    ("BK-404", "Design Patterns", "Books", "999.00"),
    ("BK-405", "Intro to Algorithms", "Books", "1199.00"),
)


class ProductCatalog:
    """Read-only product registry keyed by product id."""

    def __init__(self, products: Iterable[Product]):
        self._products: tuple[Product, ...] = tuple(products)
        self._by_id: dict[str, Product] = {}
        for product in self._products:
            if product.id in self._by_id:
                raise ValueError(f"Duplicate product id in catalog: {product.id}")
            self._by_id[product.id] = product

    @classmethod
    def default(cls) -> "ProductCatalog":
        """Catalog seeded with the built-in product list."""
        return cls(
            Product(id=pid, name=name, category=category, unit_price=price)
            for pid, name, category, price in DEFAULT_PRODUCTS
        )

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._by_id

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """Product with this id, or None. Absence is for the caller to judge."""
        return self._by_id.get(product_id)

    def require(self, product_id: str) -> Product:
        """Product with this id; raises UnknownProductError if absent."""
        product = self._by_id.get(product_id)
        if product is None:
            raise UnknownProductError(product_id)
        return product

    def list_all(self) -> list[Product]:
        """All products in seed order."""
        return list(self._products)

    def list_categories(self) -> list[str]:
        """Distinct category names, sorted."""
        return sorted({p.category for p in self._products})

    def search(self, query: str = "", category: Optional[str] = None) -> list[Product]:
        """
        Filter products by text and category.

        Args:
            query: Case-insensitive substring matched against id and name
            category: Exact category name; None or "All" matches every category

        Returns:
            Matching products in seed order
        """
        q = (query or "").strip().lower()
        any_category = category is None or category == ALL_CATEGORIES
        results = [
            p for p in self._products
            if (not q or q in p.id.lower() or q in p.name.lower())
            and (any_category or p.category == category)
        ]
        logger.debug(f"Catalog search q={q!r} category={category!r}: {len(results)} hits")
        return results
