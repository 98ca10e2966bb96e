"""
Product review API Endpoints.
"""

from fastapi import APIRouter, Depends

from storefront.application.add_review import AddReviewHandler, ListReviewsHandler
from storefront.application.dto import ReviewDTO, ReviewResultDTO
from storefront.domain.model.requester import Requester
from storefront.infrastructure.api.dependencies import get_repositories, get_requester
from storefront.infrastructure.api.schemas import AddReviewRequest
from storefront.infrastructure.bootstrap import Repositories

router = APIRouter()


@router.post("/{product_id}/reviews", status_code=201)
def add_review(
    product_id: str,
    body: AddReviewRequest,
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
) -> ReviewResultDTO:
    """Review a product (once per user)."""
    handler = AddReviewHandler(repos.products, repos.reviews)
    return handler.handle(requester, product_id, body.rating, body.comment)


@router.get("/{product_id}/reviews")
def list_reviews(
    product_id: str,
    repos: Repositories = Depends(get_repositories),
) -> list[ReviewDTO]:
    """Every review of a product, oldest first."""
    return ListReviewsHandler(repos.products, repos.reviews).handle(product_id)
