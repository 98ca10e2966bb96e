"""Cart aggregate: a user's mutable staging area before checkout.

The cart owns its lines.  Stock checks here are advisory: they use the
product's stock at the moment of the mutation and are repeated at
checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import (
    InsufficientStockError,
    ItemNotFoundError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


@dataclass
class CartItem:
    """One product line in a cart.

    ``unit_price`` is the product price captured when the line was last
    added to, not the live catalog price.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Cart:
    """Aggregate root for a user's cart.

    There is at most one cart per owner.  ``total_price`` is always
    computed from the current lines; it is never stored.
    """

    owner_id: str
    items: dict[str, CartItem] = field(default_factory=dict)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Item management ------------------------------------------------------

    def add_item(self, product: Product, quantity: int) -> None:
        """Add *quantity* of *product*, merging with an existing line.

        The combined quantity is checked against the product's current
        stock and the whole line is re-priced at the current price.
        """
        qty = Quantity(quantity)
        existing = self.items.get(product.id)
        combined = qty.value + (existing.quantity.value if existing else 0)
        if combined > product.stock:
            raise InsufficientStockError(product.id, combined, product.stock)

        self.items[product.id] = CartItem(
            product_id=product.id,
            product_name=product.name,
            quantity=Quantity(combined),
            unit_price=product.price,
        )
        self._touch()

    def set_quantity(self, product: Product, quantity: int) -> None:
        """Set the quantity of an existing line; zero removes it."""
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 0:
            raise ValidationError("Quantity must be a non-negative integer")

        item = self._find_item(product.id)
        if quantity == 0:
            del self.items[product.id]
        else:
            if quantity > product.stock:
                raise InsufficientStockError(product.id, quantity, product.stock)
            item.quantity = Quantity(quantity)
        self._touch()

    def remove_item(self, product_id: str) -> None:
        """Drop the line for *product_id*; a missing line is not an error."""
        self.items.pop(product_id, None)
        self._touch()

    def clear(self) -> None:
        self.items.clear()
        self._touch()

    def has_item(self, product_id: str) -> bool:
        return product_id in self.items

    # --- Computed properties --------------------------------------------------

    @property
    def total_price(self) -> Money:
        result = Money.zero()
        for item in self.items.values():
            result = result + item.line_total
        return result.rounded()

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items.values())

    # --- Internal helpers -----------------------------------------------------

    def _find_item(self, product_id: str) -> CartItem:
        item = self.items.get(product_id)
        if item is None:
            raise ItemNotFoundError(f"Product '{product_id}' is not in the cart")
        return item

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
