"""Integration tests for the review use cases."""

import pytest

from storefront.application.add_review import AddReviewHandler, ListReviewsHandler
from storefront.domain.exceptions import (
    DuplicateReviewError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.requester import Requester
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository, FakeReviewRepository


def _setup() -> tuple[AddReviewHandler, FakeProductRepository, FakeReviewRepository]:
    products = FakeProductRepository(
        [Product(id="1", name="Widget", sku="W-1", price=Money.of("10.00"), stock=5)]
    )
    reviews = FakeReviewRepository()
    return AddReviewHandler(products, reviews), products, reviews


class TestAddReview:

    def test_first_review_sets_rating(self):
        handler, products, _ = _setup()

        result = handler.handle(Requester.customer("alice"), "1", 5, "Great")

        assert result.product_rating == "5.0"
        assert result.review_count == 1
        assert result.review.comment == "Great"
        assert products.get_by_id("1").review_count == 1

    def test_rating_is_mean_of_reviews(self):
        handler, products, _ = _setup()
        handler.handle(Requester.customer("alice"), "1", 5, "Great")

        result = handler.handle(Requester.customer("bob"), "1", 3, "Fine")

        assert result.product_rating == "4.0"
        assert str(products.get_by_id("1").rating) == "4.0"

    def test_duplicate_review_rejected(self):
        handler, products, reviews = _setup()
        handler.handle(Requester.customer("alice"), "1", 5, "Great")

        with pytest.raises(DuplicateReviewError, match="already reviewed"):
            handler.handle(Requester.customer("alice"), "1", 1, "Changed my mind")

        assert len(reviews.list_for_product("1")) == 1
        assert products.get_by_id("1").review_count == 1

    def test_unknown_product(self):
        handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle(Requester.customer("alice"), "9", 4, "Hmm")

    def test_invalid_rating(self):
        handler, _, reviews = _setup()
        with pytest.raises(ValidationError):
            handler.handle(Requester.customer("alice"), "1", 6, "Too good")
        assert reviews.list_for_product("1") == []


class TestListReviews:

    def test_lists_product_reviews(self):
        handler, products, reviews = _setup()
        handler.handle(Requester.customer("alice"), "1", 4, "Nice")

        result = ListReviewsHandler(products, reviews).handle("1")

        assert [(r.user_id, r.rating) for r in result] == [("alice", 4)]

    def test_unknown_product(self):
        _, products, reviews = _setup()
        with pytest.raises(EntityNotFoundError):
            ListReviewsHandler(products, reviews).handle("9")
