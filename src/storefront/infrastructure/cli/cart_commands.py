"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from storefront.application.add_cart_item import AddCartItemHandler
from storefront.application.dto import CartDTO
from storefront.application.remove_cart_item import ClearCartHandler, RemoveCartItemHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import cart_repository, product_repository
from storefront.infrastructure.cli.context import current_requester


def _display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} "
            f"{'$' + item.unit_price:>10} {'$' + item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Cart Total':<27} {'$' + dto.total_price:>20}")


@click.command("show")
def cart_show() -> None:
    """Show your cart."""
    handler = ShowCartHandler(cart_repo=cart_repository())

    try:
        dto = handler.handle(current_requester())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=click.IntRange(min=1), help="Quantity to add.")
def cart_add(product_id: str, quantity: int) -> None:
    """Add a product to your cart."""
    handler = AddCartItemHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(current_requester(), product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("update")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=click.IntRange(min=0), help="New quantity (0 removes).")
def cart_update(product_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartItemHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(current_requester(), product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("remove")
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(product_id: str) -> None:
    """Remove a product from your cart."""
    handler = RemoveCartItemHandler(cart_repo=cart_repository())

    try:
        dto = handler.handle(current_requester(), product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("clear")
def cart_clear() -> None:
    """Empty your cart."""
    handler = ClearCartHandler(cart_repo=cart_repository())

    try:
        handler.handle(current_requester())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Cart cleared.")
