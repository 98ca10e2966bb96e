"""Application service: Place Order use case (checkout).

Converts the requester's cart into an immutable, priced Order.

Steps:
1. Validate the shipping address.
2. Take the cart atomically, leaving an empty one behind; an empty or
   missing cart is rejected.
3. Re-check every line against live stock (fail fast, no mutation yet).
4. Price the lines from their cart snapshots.
5. Reserve stock with conditional decrements (all or nothing).
6. Persist the order; if that fails, give the stock back.

Any failure after step 2 puts the cart back, so a rejected checkout
keeps its cart and never holds stock.  Because the cart is taken before
stock is reserved, two concurrent checkouts of one cart place one order.
"""

from __future__ import annotations

from collections.abc import Mapping

from loguru import logger

from storefront.application.dto import OrderDTO
from storefront.application.mappers import order_to_dto
from storefront.domain.exceptions import (
    CartEmptyError,
    EntityNotFoundError,
    InsufficientStockError,
    StorageError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.model.requester import Requester
from storefront.domain.model.value_objects import Quantity, ShippingAddress
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from storefront.domain.service.pricing_policy import PricingPolicy

DEFAULT_PAYMENT_METHOD = "mock"


class PlaceOrderHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        pricing_policy: PricingPolicy | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._pricing = pricing_policy or PricingPolicy()

    def handle(
        self,
        requester: Requester,
        shipping_address: Mapping[str, object] | ShippingAddress | None,
        payment_method: str = DEFAULT_PAYMENT_METHOD,
    ) -> OrderDTO:
        address = (
            shipping_address
            if isinstance(shipping_address, ShippingAddress)
            else ShippingAddress.from_mapping(shipping_address)
        )

        cart = self._cart_repo.take(requester.user_id)
        if cart is None or cart.is_empty:
            raise CartEmptyError("Cart is empty")

        try:
            order = self._commit(requester, cart, address, payment_method)
        except Exception:
            self._put_back(cart)
            raise

        logger.info(
            f"Order #{order.id} placed by user {requester.user_id}: "
            f"{len(order.items)} line(s), total {order.total_price}"
        )
        return order_to_dto(order)

    # --- Internal helpers -----------------------------------------------------

    def _commit(
        self,
        requester: Requester,
        cart: Cart,
        address: ShippingAddress,
        payment_method: str,
    ) -> Order:
        lines = self._snapshot_lines(cart.items.values())
        order = Order.place(
            owner_id=requester.user_id,
            items=lines,
            shipping_address=address,
            payment_method=payment_method or DEFAULT_PAYMENT_METHOD,
            pricing=self._pricing.price(lines),
        )

        reservation = InventoryReservationService(self._product_repo)
        try:
            reservation.reserve_for_order(order)
        except InsufficientStockError as exc:
            logger.warning(
                f"Checkout for user {requester.user_id} lost the race for product "
                f"{exc.product_id}: {exc}"
            )
            raise

        try:
            self._order_repo.save(order)
        except Exception:
            logger.error(
                f"Persisting order for user {requester.user_id} failed; releasing stock"
            )
            reservation.release_for_order(order)
            raise
        return order

    def _snapshot_lines(self, cart_items) -> list[OrderLineItem]:
        """Freeze the cart lines, re-validating each against live stock."""
        lines: list[OrderLineItem] = []
        for item in sorted(cart_items, key=lambda i: i.product_id):
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{item.product_id}' not found")
            if item.quantity.value > product.stock:
                raise InsufficientStockError(
                    product.id, item.quantity.value, product.stock
                )
            lines.append(
                OrderLineItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=Quantity(item.quantity.value),
                    unit_price=item.unit_price,  # <-- cart snapshot, not live price
                )
            )
        return lines

    def _put_back(self, cart: Cart) -> None:
        """Restore a taken cart after a failed checkout.

        The checkout error is what the caller sees, so a storage failure
        here is logged rather than raised.
        """
        try:
            self._cart_repo.save(cart)
        except StorageError as exc:
            logger.error(f"Checkout failed and restoring cart of {cart.owner_id} failed: {exc}")
