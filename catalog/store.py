"""
catalog/store.py -- In-memory product catalog.

Pattern: Repository (same shape as auth/store.py). CatalogStore owns the only
list of Product records. One instance is created in the API lifespan and
attached to app.state.catalog.

Rules enforced by create():
  - id, name, category, price and in_stock are all required
  - price must not be negative
  - product ids are unique (checked first)
  - product names are unique ignoring case
  - a category never seen before is logged, not rejected

Duplicate detection is a linear scan with str.lower() on both sides. Records
are never renamed or removed, so the checks only need to run on create.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from catalog.models import Product
from core.exceptions import DuplicateError, ValidationError

logger = logging.getLogger("stockroom.catalog")

SEED_PRODUCTS: tuple[Product, ...] = (
    Product(id=1, name="Laptop", category="Electronics", price=999.99, in_stock=True),
    Product(id=2, name="T-Shirt", category="Apparel", price=19.99, in_stock=True),
    Product(id=3, name="Coffee Mug", category="Home", price=9.99, in_stock=False),
)


def _same(a: str, b: str) -> bool:
    return a.lower() == b.lower()


class CatalogStore:
    def __init__(self, products: Iterable[Product] | None = None) -> None:
        source = SEED_PRODUCTS if products is None else products
        # Copy so the seed tuple's records are never shared between stores
        self._products: list[Product] = [
            Product(id=p.id, name=p.name, category=p.category, price=p.price, in_stock=p.in_stock) for p in source
        ]
        self._lock = threading.Lock()

    def list(self, category: str | None = None) -> list[Product]:
        """Return products in insertion order, optionally filtered by category (ignoring case)."""
        if not category:
            return list(self._products)
        return [p for p in self._products if _same(p.category, category)]

    def get(self, product_id: int) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def has_category(self, category: str) -> bool:
        return any(_same(p.category, category) for p in self._products)

    def create(
        self,
        product_id: int | None,
        name: str | None,
        category: str | None,
        price: int | float | None,
        in_stock: bool | None,
    ) -> Product:
        """Validate and append a new product, returning the stored record.

        Raises ValidationError when a field is missing or price is negative,
        DuplicateError when the id or (case-insensitive) name is taken.
        """
        if not product_id or not name or not category or price is None or in_stock is None:
            raise ValidationError("All fields are required")
        if price < 0:
            raise ValidationError("Invalid price", "Price must be a non-negative number")

        with self._lock:
            if self.get(product_id) is not None:
                raise DuplicateError("Duplicate product ID", "Product with this ID already exists")
            if any(_same(p.name, name) for p in self._products):
                raise DuplicateError(
                    "Duplicate product name",
                    "Product with this name already exists (case-insensitive check)",
                )
            if not self.has_category(category):
                logger.info("New category detected: %s", category)

            product = Product(id=product_id, name=name, category=category, price=price, in_stock=in_stock)
            self._products.append(product)

        return product
