"""CLI commands for the catalog: products, taxons and stock."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.list_products import ListProductsHandler
from storefront.application.set_stock import SetStockHandler
from storefront.application.show_product import ShowProductHandler
from storefront.application.show_taxon import ShowTaxonHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import Taxon
from storefront.infrastructure.bootstrap import (
    product_repository,
    product_searcher,
    stock_repository,
)
from storefront.infrastructure.cli.common import CliState, pass_state


def _echo_products(products) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10}  Variants")
    click.echo("-" * 54)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<24} {p.price:>10}  {', '.join(p.variant_ids)}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--sku", default=None, help="SKU of the master variant.")
@click.option("--taxon", "taxons", multiple=True, help="Taxon permalink (repeatable).")
@click.option("--unavailable", is_flag=True, default=False, help="Do not make it available yet.")
@pass_state
def product_add(
    state: CliState, name: str, price: str, sku: str | None, taxons: tuple[str, ...], unavailable: bool
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(state.config), currency=state.config.currency)

    try:
        product = handler.handle(
            name=name,
            price=price,
            sku=sku,
            available_on=None if unavailable else datetime.now(timezone.utc),
            taxons=list(taxons),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"(variant {product.master.id})"
    )


@click.command("list")
@click.option("--keywords", default=None, help="Filter by name.")
@pass_state
def product_list(state: CliState, keywords: str | None) -> None:
    """List the products you can browse."""
    handler = ListProductsHandler(product_searcher(state.config))
    response = handler.handle(state.session(), keywords=keywords)
    _echo_products(response.context["products"])


@click.command("show")
@click.argument("slug")
@pass_state
def product_show(state: CliState, slug: str) -> None:
    """Show a product by slug or ID."""
    handler = ShowProductHandler(product_repository(state.config))

    try:
        response = handler.handle(state.session(), slug)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    p = response.context["product"]
    click.echo(f"{p.name}  {p.price}")
    click.echo(f"Slug: {p.slug}  Variants: {', '.join(p.variant_ids)}")
    if not p.available:
        click.echo("(not available yet)")


@click.command("add")
@click.option("--name", required=True, help="Taxon name.")
@click.option("--permalink", required=True, help="Permalink, e.g. 'categories/bags'.")
@pass_state
def taxon_add(state: CliState, name: str, permalink: str) -> None:
    """Add a taxon."""
    repo = product_repository(state.config)
    if repo.get_taxon(permalink) is not None:
        raise click.ClickException(f"Taxon '{permalink}' already exists")
    repo.save_taxon(Taxon(id=permalink, name=name, permalink=permalink))
    click.echo(f"Taxon '{name}' added at /t/{permalink}")


@click.command("show")
@click.argument("permalink")
@pass_state
def taxon_show(state: CliState, permalink: str) -> None:
    """List the products filed under a taxon."""
    handler = ShowTaxonHandler(product_repository(state.config), product_searcher(state.config))

    try:
        response = handler.handle(state.session(), permalink)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(response.context["taxon"])
    _echo_products(response.context["products"])


@click.command("set")
@click.option("--variant", "variant_id", required=True, help="Variant ID.")
@click.option("--count", required=True, type=int, help="Units on hand.")
@click.option("--backorderable", is_flag=True, default=False, help="Allow selling beyond stock.")
@pass_state
def stock_set(state: CliState, variant_id: str, count: int, backorderable: bool) -> None:
    """Set stock on hand for a variant."""
    handler = SetStockHandler(
        stock_repo=stock_repository(state.config),
        product_repo=product_repository(state.config),
    )

    try:
        item = handler.handle(variant_id, count, backorderable)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{item.variant_name}' set to {item.count_on_hand}")
