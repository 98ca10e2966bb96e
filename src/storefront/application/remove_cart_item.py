"""Application service: Remove Cart Item and Clear Cart use cases.

Both are unconditional: removing a product that is not in the cart, or
clearing a cart that was never created, succeeds and returns the
(possibly empty) cart.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.mappers import cart_to_dto
from storefront.domain.model.cart import Cart
from storefront.domain.model.requester import Requester
from storefront.domain.repository.cart_repository import CartRepository


class RemoveCartItemHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, requester: Requester, product_id: str) -> CartDTO:
        cart = self._cart_repo.get_by_owner(requester.user_id)
        if cart is None:
            return cart_to_dto(Cart(owner_id=requester.user_id))

        cart.remove_item(product_id)
        self._cart_repo.save(cart)
        return cart_to_dto(cart)


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, requester: Requester) -> CartDTO:
        cart = self._cart_repo.get_by_owner(requester.user_id)
        if cart is None:
            return cart_to_dto(Cart(owner_id=requester.user_id))

        cart.clear()
        self._cart_repo.save(cart)
        return cart_to_dto(cart)
