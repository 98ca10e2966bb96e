"""Application service: Add Cart Item use case.

Looks up the live product, lets the Cart aggregate validate the combined
quantity against current stock, and persists the cart (creating it on
first use).
"""

from __future__ import annotations

from loguru import logger

from storefront.application.dto import CartDTO
from storefront.application.mappers import cart_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import Cart
from storefront.domain.model.requester import Requester
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


class AddCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, requester: Requester, product_id: str, quantity: int) -> CartDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None or not product.is_active:
            raise EntityNotFoundError(f"Product '{product_id}' not found")

        cart = self._cart_repo.get_by_owner(requester.user_id)
        if cart is None:
            cart = Cart(owner_id=requester.user_id)

        cart.add_item(product, quantity)
        self._cart_repo.save(cart)

        logger.debug(f"User {requester.user_id} added {quantity} x {product_id} to cart")
        return cart_to_dto(cart)
