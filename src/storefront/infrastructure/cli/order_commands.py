"""CLI commands for placed orders."""

from __future__ import annotations

import click

from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import order_repository
from storefront.infrastructure.cli.common import CliState, echo_response, pass_state


@click.command("show")
@click.option("--number", required=True, help="Order number to display.")
@pass_state
def order_show(state: CliState, number: str) -> None:
    """Show details of one of your orders."""
    handler = ShowOrderHandler(order_repo=order_repository(state.config))

    try:
        response = handler.handle(state.session(), number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_response(response)
