"""Application service: Add Review and List Reviews use cases.

One review per (user, product).  After a review is stored the product's
rating is recomputed from every review of that product.
"""

from __future__ import annotations

from loguru import logger

from storefront.application.dto import ReviewDTO, ReviewResultDTO
from storefront.application.mappers import review_to_dto
from storefront.domain.exceptions import DuplicateReviewError, EntityNotFoundError
from storefront.domain.model.requester import Requester
from storefront.domain.model.review import Review
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository


class AddReviewHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        review_repo: ReviewRepository,
    ) -> None:
        self._product_repo = product_repo
        self._review_repo = review_repo

    def handle(
        self,
        requester: Requester,
        product_id: str,
        rating: int,
        comment: str,
    ) -> ReviewResultDTO:
        review = Review.create(requester.user_id, product_id, rating, comment)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")

        if not self._review_repo.add_if_absent(review):
            raise DuplicateReviewError("You have already reviewed this product")

        ratings = [r.rating for r in self._review_repo.list_for_product(product_id)]
        product.apply_review_ratings(ratings)
        self._product_repo.update_rating(product.id, product.rating, product.review_count)

        logger.info(
            f"User {requester.user_id} reviewed product {product_id}; "
            f"rating now {product.rating} over {product.review_count} review(s)"
        )
        return ReviewResultDTO(
            review=review_to_dto(review),
            product_rating=f"{product.rating:.1f}",
            review_count=product.review_count,
        )


class ListReviewsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        review_repo: ReviewRepository,
    ) -> None:
        self._product_repo = product_repo
        self._review_repo = review_repo

    def handle(self, product_id: str) -> list[ReviewDTO]:
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        return [review_to_dto(r) for r in self._review_repo.list_for_product(product_id)]
