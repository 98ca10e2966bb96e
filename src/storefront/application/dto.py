"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP layers and the application layer
without exposing domain internals.  Money is carried as two-decimal
strings (e.g. ``"165.00"``).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartItemDTO:

    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:

    owner_id: str
    items: list[CartItemDTO]
    total_price: str
    item_count: int


@dataclass(frozen=True)
class OrderLineItemDTO:

    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order with its frozen pricing."""

    id: int
    owner_id: str
    items: list[OrderLineItemDTO]
    shipping_address: dict[str, str | None]
    payment_method: str
    subtotal: str
    shipping_cost: str
    tax: str
    total_price: str
    order_status: str
    payment_status: str
    tracking_number: str | None
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class OrderStatusPatch:
    """Input: an admin status update.  Only the supplied fields are applied."""

    order_status: str | None = None
    payment_status: str | None = None
    tracking_number: str | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.order_status is None
            and self.payment_status is None
            and self.tracking_number is None
        )


@dataclass(frozen=True)
class ProductDTO:

    id: str
    name: str
    sku: str
    price: str
    stock: int
    is_active: bool
    rating: str
    review_count: int


@dataclass(frozen=True)
class ReviewDTO:

    user_id: str
    product_id: str
    rating: int
    comment: str
    created_at: str


@dataclass(frozen=True)
class ReviewResultDTO:
    """Output: the stored review plus the product's refreshed rating."""

    review: ReviewDTO
    product_rating: str
    review_count: int
