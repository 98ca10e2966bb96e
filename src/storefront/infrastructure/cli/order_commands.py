"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderDTO, OrderStatusPatch
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    order_repository,
    pricing_policy,
    product_repository,
)
from storefront.infrastructure.cli.context import current_requester


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.order_status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.owner_id}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} "
            f"{'$' + item.unit_price:>10} {'$' + item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {'$' + dto.subtotal:>20}")
    click.echo(f"  {'Shipping':<27} {'$' + dto.shipping_cost:>20}")
    click.echo(f"  {'Tax':<27} {'$' + dto.tax:>20}")
    click.echo(f"  {'Order Total':<27} {'$' + dto.total_price:>20}")


@click.command("place")
@click.option("--name", required=True, help="Recipient name.")
@click.option("--street", required=True, help="Street address.")
@click.option("--city", required=True, help="City.")
@click.option("--state", default=None, help="State or region.")
@click.option("--postal-code", required=True, help="Postal code.")
@click.option("--country", required=True, help="Country.")
@click.option("--phone", default=None, help="Contact phone.")
@click.option("--payment-method", default="mock", show_default=True, help="Payment method.")
def order_place(
    name: str,
    street: str,
    city: str,
    state: str | None,
    postal_code: str,
    country: str,
    phone: str | None,
    payment_method: str,
) -> None:
    """Check out your cart and place an order."""
    handler = PlaceOrderHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        order_repo=order_repository(),
        pricing_policy=pricing_policy(),
    )
    address = {
        "name": name,
        "street": street,
        "city": city,
        "state": state,
        "postal_code": postal_code,
        "country": country,
        "phone": phone,
    }

    try:
        dto = handler.handle(current_requester(), address, payment_method)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} placed.")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id, current_requester())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--all", "all_orders", is_flag=True, default=False, help="Every order (admin only).")
def order_list(all_orders: bool) -> None:
    """List your orders, newest first."""
    handler = ListOrdersHandler(order_repo=order_repository())
    requester = current_requester()

    try:
        orders = handler.handle_all(requester) if all_orders else handler.handle(requester)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<12} {'Status':<12} {'Payment':<10} {'Total':>10}")
    click.echo("-" * 54)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.owner_id:<12} {o.order_status:<12} "
            f"{o.payment_status:<10} {'$' + o.total_price:>10}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--status", "order_status", default=None, help="New order status.")
@click.option("--payment", "payment_status", default=None, help="New payment status.")
@click.option("--tracking", "tracking_number", default=None, help="Tracking number.")
def order_status(
    order_id: int,
    order_status: str | None,
    payment_status: str | None,
    tracking_number: str | None,
) -> None:
    """Update an order's status fields (admin only)."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )
    patch = OrderStatusPatch(
        order_status=order_status,
        payment_status=payment_status,
        tracking_number=tracking_number,
    )

    try:
        dto = handler.handle(order_id, patch, current_requester())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.order_status} (payment={dto.payment_status}).")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel a pending order (returns its items to stock)."""
    handler = CancelOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(order_id, current_requester())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled.")
