"""Domain service: checkout pricing.

Turns a set of order lines into subtotal, shipping, tax and total.  The
thresholds are constructor arguments so deployments can configure them;
the module constants are the defaults.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import OrderLineItem, OrderPricing
from storefront.domain.model.value_objects import Money

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
FREE_SHIPPING_THRESHOLD = Money(Decimal("100.00"))
FLAT_SHIPPING_RATE = Money(Decimal("10.00"))
TAX_RATE = Decimal("0.10")


@dataclass(frozen=True)
class PricingPolicy:
    """Shipping is free only when the subtotal is strictly above the threshold."""

    free_shipping_threshold: Money = FREE_SHIPPING_THRESHOLD
    flat_shipping_rate: Money = FLAT_SHIPPING_RATE
    tax_rate: Decimal = TAX_RATE

    def __post_init__(self) -> None:
        if self.tax_rate < Decimal("0"):
            raise ValidationError(f"Tax rate cannot be negative, got {self.tax_rate}")

    def price(self, items: Iterable[OrderLineItem]) -> OrderPricing:
        subtotal = Money.zero()
        for item in items:
            subtotal = subtotal + item.line_total
        subtotal = subtotal.rounded()

        shipping = self.shipping_for(subtotal)
        tax = subtotal.scaled(self.tax_rate)
        total = (subtotal + shipping + tax).rounded()

        return OrderPricing(
            subtotal=subtotal,
            shipping_cost=shipping,
            tax=tax,
            total_price=total,
        )

    def shipping_for(self, subtotal: Money) -> Money:
        if subtotal > self.free_shipping_threshold:
            return Money.zero()
        return self.flat_shipping_rate.rounded()
