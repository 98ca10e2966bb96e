import click

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.requester import Requester, Role
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_list,
    order_place,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_review,
    product_update,
)
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.logging_setup import configure_logging


@click.group()
@click.option("--user", envvar="STOREFRONT_USER", default=None, help="Acting user ID.")
@click.option("--admin", is_flag=True, default=False, help="Act with the admin role.")
@click.pass_context
def cli(ctx: click.Context, user: str | None, admin: bool) -> None:
    """Storefront: carts, checkout and orders."""
    configure_logging(get_settings().log_level)
    requester = None
    if user is not None:
        try:
            requester = Requester(user_id=user, role=Role.ADMIN if admin else Role.CUSTOMER)
        except ValidationError as exc:
            raise click.BadParameter(str(exc), param_hint="--user")
    ctx.obj = requester


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def product() -> None:
    """Manage products and reviews."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_review)
product.add_command(product_update)
