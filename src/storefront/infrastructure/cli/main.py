import logging
from pathlib import Path

import click

from storefront.infrastructure.cli.cart_commands import cart_add, cart_empty, cart_show, cart_update
from storefront.infrastructure.cli.catalog_commands import (
    product_add,
    product_list,
    product_show,
    stock_set,
    taxon_add,
    taxon_show,
)
from storefront.infrastructure.cli.checkout_commands import checkout_show, checkout_update
from storefront.infrastructure.cli.common import CliState
from storefront.infrastructure.cli.order_commands import order_show
from storefront.infrastructure.cli.user_commands import user_create
from storefront.infrastructure.config import settings


@click.group()
@click.option("--api-key", envvar="STOREFRONT_API_KEY", default=None, help="Sign in with this API key.")
@click.option("--guest-token", envvar="STOREFRONT_GUEST_TOKEN", default=None, help="Guest cart token.")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the JSON data files.",
)
@click.pass_context
def cli(ctx: click.Context, api_key: str | None, guest_token: str | None, data_dir: Path | None) -> None:
    """Storefront: cart and checkout."""
    config = settings if data_dir is None else settings.model_copy(update={"data_dir": data_dir})
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliState(config=config, api_key=api_key, guest_token=guest_token)


@cli.group()
def cart() -> None:
    """Manage the shopping cart."""


@cli.group()
def checkout() -> None:
    """Walk the current order through checkout."""


@cli.group()
def order() -> None:
    """Look up placed orders."""


@cli.group()
def product() -> None:
    """Browse and manage products."""


@cli.group()
def taxon() -> None:
    """Browse and manage taxons."""


@cli.group()
def stock() -> None:
    """Manage stock levels."""


@cli.group()
def user() -> None:
    """Manage user accounts."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_empty)
cart.add_command(cart_show)
cart.add_command(cart_update)
checkout.add_command(checkout_show)
checkout.add_command(checkout_update)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
taxon.add_command(taxon_add)
taxon.add_command(taxon_show)
stock.add_command(stock_set)
user.add_command(user_create)
