"""Mapping from domain objects to DTOs, shared by the use-case handlers."""

from __future__ import annotations

from storefront.application.dto import (
    CartDTO,
    CartItemDTO,
    OrderDTO,
    OrderLineItemDTO,
    ProductDTO,
    ReviewDTO,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.review import Review


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        owner_id=cart.owner_id,
        items=[
            CartItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=item.unit_price.to_plain(),
                line_total=item.line_total.rounded().to_plain(),
            )
            for item in sorted(cart.items.values(), key=lambda i: i.product_id)
        ],
        total_price=cart.total_price.to_plain(),
        item_count=cart.item_count,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        owner_id=order.owner_id,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=item.unit_price.to_plain(),
                line_total=item.line_total.rounded().to_plain(),
            )
            for item in order.items
        ],
        shipping_address=order.shipping_address.to_dict(),
        payment_method=order.payment_method,
        subtotal=order.subtotal.to_plain(),
        shipping_cost=order.shipping_cost.to_plain(),
        tax=order.tax.to_plain(),
        total_price=order.total_price.to_plain(),
        order_status=order.order_status.value,
        payment_status=order.payment_status.value,
        tracking_number=order.tracking_number,
        created_at=order.created_at.isoformat(),
        updated_at=order.updated_at.isoformat(),
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        sku=product.sku,
        price=product.price.to_plain(),
        stock=product.stock,
        is_active=product.is_active,
        rating=f"{product.rating:.1f}",
        review_count=product.review_count,
    )


def review_to_dto(review: Review) -> ReviewDTO:
    return ReviewDTO(
        user_id=review.user_id,
        product_id=review.product_id,
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at.isoformat(),
    )
