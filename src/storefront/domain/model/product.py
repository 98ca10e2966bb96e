"""Product aggregate.

Products live independently of carts and orders.  Catalog management is
owned elsewhere; the core reads price and stock, decrements stock at
checkout and refreshes the derived rating when a review is added.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

RATING_PRECISION = Decimal("0.1")


@dataclass
class Product:
    """A product in the catalog.

    ``rating`` and ``review_count`` are derived from the product's reviews
    and only change through ``apply_review_ratings()``.
    """

    id: str
    name: str
    sku: str
    price: Money
    stock: int = 0
    is_active: bool = True
    original_price: Money | None = None
    rating: Decimal = Decimal("0")
    review_count: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.stock, int) or self.stock < 0:
            raise ValidationError(f"Stock must be a non-negative integer, got {self.stock!r}")

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect carts or orders already holding a price
        snapshot.
        """
        self.price = new_price

    def apply_review_ratings(self, ratings: Sequence[int]) -> None:
        """Recompute the aggregate rating from every review of this product."""
        self.review_count = len(ratings)
        if not ratings:
            self.rating = Decimal("0")
            return
        mean = Decimal(sum(ratings)) / Decimal(len(ratings))
        self.rating = mean.quantize(RATING_PRECISION, rounding=ROUND_HALF_UP)
