"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, in-memory) live in the
infrastructure layer and must make ``decrement_stock`` atomic with
respect to every other stock mutation on the same product.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Product | None:
        """Return a product by its SKU, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new product, or the catalog fields of an existing one.

        For an existing product the stored stock and rating fields are
        kept; they change only through the dedicated methods below.
        """

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically subtract *quantity* iff the resulting stock stays >= 0.

        Returns False, leaving stock unchanged, when the product is
        missing or has too little stock.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> None:
        """Atomically add *quantity* back to stock (compensation, restock)."""

    @abstractmethod
    def update_rating(self, product_id: str, rating: Decimal, review_count: int) -> None:
        """Write the derived rating fields without touching price or stock."""
