"""Application service: Show Cart use case (query).

Returns the requester's cart, or an empty one if none was saved yet.
The empty cart is not persisted; carts are created on first mutation.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.mappers import cart_to_dto
from storefront.domain.model.cart import Cart
from storefront.domain.model.requester import Requester
from storefront.domain.repository.cart_repository import CartRepository


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, requester: Requester) -> CartDTO:
        cart = self._cart_repo.get_by_owner(requester.user_id)
        if cart is None:
            cart = Cart(owner_id=requester.user_id)
        return cart_to_dto(cart)
