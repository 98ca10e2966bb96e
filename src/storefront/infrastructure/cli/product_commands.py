"""CLI commands for the Product aggregate and its reviews."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.add_review import AddReviewHandler
from storefront.application.mappers import product_to_dto
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository, review_repository
from storefront.infrastructure.cli.context import current_requester


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Unique stock-keeping unit.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=click.IntRange(min=0), help="Units in stock.")
def product_add(name: str, sku: str, price: str, stock: int) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(name=name, sku=sku, price=price, stock=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        products = [product_to_dto(p) for p in product_repository().list_all()]
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'SKU':<10} {'Name':<20} {'Price':>10} {'Stock':>6} {'Rating':>7}")
    click.echo("-" * 64)
    for p in products:
        name = p.name if p.is_active else f"{p.name} (inactive)"
        click.echo(
            f"{p.id:<6} {p.sku:<10} {name:<20} {'$' + p.price:>10} "
            f"{p.stock:>6} {p.rating:>7}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--active/--inactive", default=None, help="Show or hide the product.")
def product_update(product_id: str, price: str | None, active: bool | None) -> None:
    """Update a product's price or visibility."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id=product_id, new_price=price, active=active)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} updated.")


@click.command("review")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--rating", required=True, type=int, help="Rating from 1 to 5.")
@click.option("--comment", required=True, help="Review text.")
def product_review(product_id: str, rating: int, comment: str) -> None:
    """Review a product (once per user)."""
    handler = AddReviewHandler(
        product_repo=product_repository(),
        review_repo=review_repository(),
    )

    try:
        result = handler.handle(current_requester(), product_id, rating, comment)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Review saved. Product #{product_id} is rated {result.product_rating} "
        f"({result.review_count} review(s))."
    )
