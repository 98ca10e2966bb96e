"""Abstract repository for Review entities."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.review import Review


class ReviewRepository(ABC):

    @abstractmethod
    def add_if_absent(self, review: Review) -> bool:
        """Atomically store *review* unless the user already reviewed the product.

        Returns False, storing nothing, for a duplicate.
        """

    @abstractmethod
    def list_for_product(self, product_id: str) -> list[Review]:
        """Return every review of a product, oldest first."""
