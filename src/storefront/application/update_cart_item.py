"""Application service: Update Cart Item use case.

Sets the quantity of an existing cart line.  Zero removes the line;
any other value is re-validated against the product's live stock.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.mappers import cart_to_dto
from storefront.domain.exceptions import (
    EntityNotFoundError,
    ItemNotFoundError,
    ValidationError,
)
from storefront.domain.model.requester import Requester
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


class UpdateCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, requester: Requester, product_id: str, quantity: int) -> CartDTO:
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 0:
            raise ValidationError("Quantity must be a non-negative integer")

        cart = self._cart_repo.get_by_owner(requester.user_id)
        if cart is None or not cart.has_item(product_id):
            raise ItemNotFoundError(f"Product '{product_id}' is not in the cart")

        if quantity == 0:
            # Removing a line needs no catalog lookup.
            cart.remove_item(product_id)
        else:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            cart.set_quantity(product, quantity)

        self._cart_repo.save(cart)
        return cart_to_dto(cart)
