"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.service.pricing_policy import PricingPolicy
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_review_repository import (
    JsonReviewRepository,
)


@dataclass(frozen=True)
class Repositories:
    """Every repository the use cases need, bundled for the delivery layers."""

    products: ProductRepository
    carts: CartRepository
    orders: OrderRepository
    reviews: ReviewRepository


def _data_dir() -> Path:
    return get_settings().data_dir


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(_data_dir() / "products.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(_data_dir() / "carts.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(_data_dir() / "orders.json")


def review_repository() -> JsonReviewRepository:
    return JsonReviewRepository(_data_dir() / "reviews.json")


def repositories() -> Repositories:
    return Repositories(
        products=product_repository(),
        carts=cart_repository(),
        orders=order_repository(),
        reviews=review_repository(),
    )


def pricing_policy(settings: Settings | None = None) -> PricingPolicy:
    settings = settings or get_settings()
    return PricingPolicy(
        free_shipping_threshold=Money(settings.free_shipping_threshold),
        flat_shipping_rate=Money(settings.flat_shipping_rate),
        tax_rate=settings.tax_rate,
    )
