"""Order aggregate: the committed, priced result of a checkout.

Items and pricing are frozen at creation.  Afterwards only the status
fields (order status, payment status, tracking number, updated_at) may
change, and order status only moves along the lifecycle graph.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    BusinessRuleError,
    InvalidStatusTransitionError,
    ValidationError,
)
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw)
        except ValueError as exc:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Invalid order status {raw!r}; expected one of: {allowed}"
            ) from exc


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"

    @staticmethod
    def parse(raw: str) -> PaymentStatus:
        try:
            return PaymentStatus(raw)
        except ValueError as exc:
            allowed = ", ".join(s.value for s in PaymentStatus)
            raise ValidationError(
                f"Invalid payment status {raw!r}; expected one of: {allowed}"
            ) from exc


# ---------------------------------------------------------------------------
# Lifecycle graph
# ---------------------------------------------------------------------------
FORWARD_PATH = (
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
)
CANCELLABLE_BY_ADMIN = frozenset({OrderStatus.PENDING, OrderStatus.PROCESSING})
TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """True if *target* is reachable from *current* in one admin update.

    Forward moves along pending, processing, shipped, delivered may
    skip intermediate steps.  ``cancelled`` is reachable from pending and
    processing only.  Re-applying the current status is always allowed.
    """
    if current == target:
        return True
    if current in TERMINAL_STATUSES:
        return False
    if target == OrderStatus.CANCELLED:
        return current in CANCELLABLE_BY_ADMIN
    return FORWARD_PATH.index(target) > FORWARD_PATH.index(current)


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a product at checkout time."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # taken from the cart snapshot, not the live price

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class OrderPricing:
    """The four money figures fixed on an order at creation."""

    subtotal: Money
    shipping_cost: Money
    tax: Money
    total_price: Money


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.place()`` for new orders.  The ``__init__`` is kept simple
    so repositories can reconstitute persisted orders without re-validating.
    """

    id: int | None
    owner_id: str
    items: tuple[OrderLineItem, ...]
    shipping_address: ShippingAddress
    payment_method: str
    pricing: OrderPricing
    order_status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    tracking_number: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        owner_id: str,
        items: list[OrderLineItem],
        shipping_address: ShippingAddress,
        payment_method: str,
        pricing: OrderPricing,
    ) -> Order:
        """Create a new pending order.

        Payment is mocked: there is no authorization step, so the payment
        status is ``completed`` from the start.
        """
        if not items:
            raise ValidationError("Order must contain at least one item")
        if not payment_method or not payment_method.strip():
            raise ValidationError("Payment method is required")

        now = datetime.now(timezone.utc)
        return Order(
            id=None,
            owner_id=owner_id,
            items=tuple(items),
            shipping_address=shipping_address,
            payment_method=payment_method.strip(),
            pricing=pricing,
            order_status=OrderStatus.PENDING,
            payment_status=PaymentStatus.COMPLETED,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def change_status(self, target: OrderStatus) -> None:
        """Move to *target* if the lifecycle graph allows it."""
        if not can_transition(self.order_status, target):
            raise InvalidStatusTransitionError(
                f"Cannot change order #{self.id} from {self.order_status.value} "
                f"to {target.value}"
            )
        self.order_status = target
        self._touch()

    def set_payment_status(self, status: PaymentStatus) -> None:
        self.payment_status = status
        self._touch()

    def set_tracking_number(self, tracking_number: str) -> None:
        if not tracking_number or not tracking_number.strip():
            raise ValidationError("Tracking number cannot be empty")
        self.tracking_number = tracking_number.strip()
        self._touch()

    def cancel(self) -> None:
        """Cancel on behalf of the owner (or an admin): pending orders only."""
        if self.order_status != OrderStatus.PENDING:
            raise BusinessRuleError(
                f"Can only cancel pending orders; order #{self.id} is "
                f"{self.order_status.value}"
            )
        self.order_status = OrderStatus.CANCELLED
        self._touch()

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        return self.pricing.subtotal

    @property
    def shipping_cost(self) -> Money:
        return self.pricing.shipping_cost

    @property
    def tax(self) -> Money:
        return self.pricing.tax

    @property
    def total_price(self) -> Money:
        return self.pricing.total_price

    @property
    def is_cancelled(self) -> bool:
        return self.order_status == OrderStatus.CANCELLED

    def quantities_by_product(self) -> dict[str, int]:
        """Total ordered quantity per product id."""
        result: dict[str, int] = {}
        for item in self.items:
            result[item.product_id] = result.get(item.product_id, 0) + item.quantity.value
        return result

    # --- Internal helpers -----------------------------------------------------

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
