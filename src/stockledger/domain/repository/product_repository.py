"""Abstract repository for the Product catalog.

The catalog must be strongly consistent: a read after a write by the same
caller observes the write.  Concrete implementations live in the
infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import Money


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def list_filtered(
        self,
        category: str | None = None,
        min_price: Money | None = None,
        max_price: Money | None = None,
        product_type: str | None = None,
    ) -> list[Product]:
        """Return products matching every filter that is not None."""

    @abstractmethod
    def create(self, product: Product) -> Product:
        """Add a product, assigning the next numeric ID, and return it."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product (full overwrite by ID)."""

    @abstractmethod
    def update_stock(self, product_id: str, quantity: int) -> int:
        """Overwrite a product's stock quantity and return the new value."""

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product; return False if it did not exist."""


def matches_filter(
    product: Product,
    category: str | None,
    min_price: Money | None,
    max_price: Money | None,
    product_type: str | None,
) -> bool:
    """Shared predicate for ``list_filtered`` implementations."""
    if category and product.category != category:
        return False
    if min_price is not None and product.price < min_price:
        return False
    if max_price is not None and product.price > max_price:
        return False
    if product_type and product.product_type != product_type:
        return False
    return True
