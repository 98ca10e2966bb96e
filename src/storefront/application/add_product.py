"""Application service: Add Product use case.

The catalog itself is managed outside this system; this handler exists
so a store can be seeded from the CLI.
"""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, name: str, sku: str, price: str, stock: int = 0) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not sku or not sku.strip():
            raise ValidationError("SKU is required")

        if self._product_repo.get_by_sku(sku.strip()) is not None:
            raise ValidationError(f"SKU '{sku}' already exists")

        # Auto-assign ID based on existing products
        numeric_ids = [int(p.id) for p in self._product_repo.list_all() if p.id.isdigit()]
        next_id = str(max(numeric_ids) + 1) if numeric_ids else "1"

        product = Product(
            id=next_id,
            name=name.strip(),
            sku=sku.strip(),
            price=Money.of(price),
            stock=stock,
        )
        self._product_repo.save(product)
        return product
