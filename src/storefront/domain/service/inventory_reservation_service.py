"""Domain service: Inventory Reservation.

Coordinates the cross-aggregate stock mutation for an order.  Every
product in the order is decremented with the repository's conditional
atomic decrement, in ascending product-id order so concurrent checkouts
always lock products in the same sequence.  If any decrement fails, the
decrements already applied for this order are restored before the error
propagates, so no partial reservation is ever left behind.
"""

from __future__ import annotations

from loguru import logger

from storefront.domain.exceptions import InsufficientStockError
from storefront.domain.model.order import Order
from storefront.domain.repository.product_repository import ProductRepository


class InventoryReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve_for_order(self, order: Order) -> None:
        """Decrement stock for every product in the order, all or nothing."""
        applied: list[tuple[str, int]] = []
        try:
            for product_id, qty in sorted(order.quantities_by_product().items()):
                if not self._product_repo.decrement_stock(product_id, qty):
                    raise InsufficientStockError(
                        product_id, qty, self._current_stock(product_id)
                    )
                applied.append((product_id, qty))
        except Exception:
            # The original error wins; restore failures are only logged.
            self._restore(applied)
            raise

    def release_for_order(self, order: Order) -> None:
        """Give every ordered quantity back to stock (cancellation, failed save)."""
        failures = self._restore(sorted(order.quantities_by_product().items()))
        if failures:
            raise failures[0]

    # --- Internal helpers -----------------------------------------------------

    def _restore(self, applied: list[tuple[str, int]]) -> list[Exception]:
        """Increment every (product_id, qty) pair, continuing past failures."""
        failures: list[Exception] = []
        for product_id, qty in applied:
            try:
                self._product_repo.increment_stock(product_id, qty)
            except Exception as exc:
                logger.error(f"Failed to restore {qty} units of product {product_id}: {exc}")
                failures.append(exc)
        if applied and not failures:
            logger.info(f"Restored stock for {len(applied)} product(s)")
        return failures

    def _current_stock(self, product_id: str) -> int:
        product = self._product_repo.get_by_id(product_id)
        return product.stock if product is not None else 0
