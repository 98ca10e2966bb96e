"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        new_price: str | None = None,
        active: bool | None = None,
    ) -> None:
        """Change a product's price and/or activity flag.

        Carts and orders keep the price they captured; only future
        additions see the new price.
        """
        if new_price is None and active is None:
            raise ValidationError("Nothing to update")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if new_price is not None:
            product.update_price(Money.of(new_price))
        if active is not None:
            product.is_active = active
        self._product_repo.save(product)
