"""Unit tests for reviews and product rating aggregation."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.review import Review
from storefront.domain.model.value_objects import Money


def _product() -> Product:
    return Product(id="1", name="Widget", sku="W-1", price=Money.of("10.00"), stock=5)


class TestReviewCreate:

    def test_valid_review(self):
        review = Review.create("alice", "1", 5, "  Great widget  ")
        assert review.rating == 5
        assert review.comment == "Great widget"
        assert review.created_at is not None

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError, match="between 1 and 5"):
            Review.create("alice", "1", rating, "ok")

    def test_rating_must_be_integer(self):
        with pytest.raises(ValidationError):
            Review.create("alice", "1", 4.5, "ok")

    def test_boolean_rating_rejected(self):
        with pytest.raises(ValidationError):
            Review.create("alice", "1", True, "ok")

    def test_blank_comment_rejected(self):
        with pytest.raises(ValidationError, match="Comment is required"):
            Review.create("alice", "1", 3, "   ")


class TestProductRating:

    def test_mean_of_two_reviews(self):
        product = _product()
        product.apply_review_ratings([5, 3])
        assert product.rating == Decimal("4.0")
        assert product.review_count == 2

    def test_mean_rounds_to_one_decimal(self):
        product = _product()
        product.apply_review_ratings([5, 4, 4])
        assert product.rating == Decimal("4.3")

    def test_half_rounds_up(self):
        product = _product()
        # 4.25 -> 4.3
        product.apply_review_ratings([5, 4, 4, 4])
        assert product.rating == Decimal("4.3")

    def test_no_reviews_resets_rating(self):
        product = _product()
        product.apply_review_ratings([5])
        product.apply_review_ratings([])
        assert product.rating == Decimal("0")
        assert product.review_count == 0
