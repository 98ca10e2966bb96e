"""
Cart API Endpoints.

Every route acts on the caller's own cart.
"""

from fastapi import APIRouter, Depends

from storefront.application.add_cart_item import AddCartItemHandler
from storefront.application.dto import CartDTO
from storefront.application.remove_cart_item import ClearCartHandler, RemoveCartItemHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.model.requester import Requester
from storefront.infrastructure.api.dependencies import get_repositories, get_requester
from storefront.infrastructure.api.schemas import AddToCartRequest, UpdateCartRequest
from storefront.infrastructure.bootstrap import Repositories

router = APIRouter()


@router.get("")
def get_cart(
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
) -> CartDTO:
    """Get the caller's cart (empty if none yet)."""
    return ShowCartHandler(repos.carts).handle(requester)


@router.post("", status_code=201)
def add_to_cart(
    body: AddToCartRequest,
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
) -> CartDTO:
    """Add a product to the cart, checked against live stock."""
    handler = AddCartItemHandler(repos.carts, repos.products)
    return handler.handle(requester, body.product_id, body.quantity)


@router.put("/{product_id}")
def update_cart_item(
    product_id: str,
    body: UpdateCartRequest,
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
) -> CartDTO:
    """Set a line's quantity; 0 removes it."""
    handler = UpdateCartItemHandler(repos.carts, repos.products)
    return handler.handle(requester, product_id, body.quantity)


@router.delete("/{product_id}")
def remove_cart_item(
    product_id: str,
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
) -> CartDTO:
    """Remove a product from the cart."""
    return RemoveCartItemHandler(repos.carts).handle(requester, product_id)


@router.delete("")
def clear_cart(
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
) -> CartDTO:
    """Empty the cart."""
    return ClearCartHandler(repos.carts).handle(requester)
