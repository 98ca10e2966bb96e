"""Review entity: one customer's rating of one product."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Review:

    user_id: str
    product_id: str
    rating: int
    comment: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(user_id: str, product_id: str, rating: int, comment: str) -> Review:
        """Create a new review, enforcing the rating range and a non-empty comment."""
        if not isinstance(rating, int) or isinstance(rating, bool):
            raise ValidationError(f"Rating must be an integer, got {type(rating).__name__}")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}"
            )
        if not isinstance(comment, str) or not comment.strip():
            raise ValidationError("Comment is required")
        return Review(
            user_id=user_id,
            product_id=product_id,
            rating=rating,
            comment=comment.strip(),
        )
