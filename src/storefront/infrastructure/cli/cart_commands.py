"""CLI commands for the shopping cart."""

from __future__ import annotations

import click

from storefront.application.edit_cart import EditCartHandler
from storefront.application.empty_cart import EmptyCartHandler
from storefront.application.populate_order import PopulateOrderHandler
from storefront.application.update_order import UpdateOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    checkout_state_machine,
    order_contents,
    order_repository,
)
from storefront.infrastructure.cli.common import CliState, echo_response, pass_state


def _parse_quantities(raw: tuple[str, ...]) -> dict[int, int]:
    """Parse ('1:3', '2:0') into {line_item_id: quantity}."""
    result: dict[int, int] = {}
    for pair in raw:
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'LineItemId:Quantity'."
            )
        line_id, qty_str = pair.split(":", 1)
        try:
            result[int(line_id)] = int(qty_str)
        except ValueError:
            raise click.BadParameter(f"Invalid line item '{pair}'.")
    return result


@click.command("add")
@click.option("--variant", "variant_id", required=True, help="Variant ID to add.")
@click.option("--quantity", default=None, help="Units to add (default 1).")
@pass_state
def cart_add(state: CliState, variant_id: str, quantity: str | None) -> None:
    """Add a variant to the cart, creating the cart if needed."""
    session = state.session()
    handler = PopulateOrderHandler(order_contents(state.config))

    try:
        response = handler.handle(session, variant_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_response(response, guest_token=state.guest_token)


@click.command("show")
@click.option("--number", default=None, help="Order number (must be your current cart).")
@pass_state
def cart_show(state: CliState, number: str | None) -> None:
    """Show the current cart."""
    handler = EditCartHandler(order_repository(state.config), state.config.currency)
    echo_response(handler.handle(state.session(), number))


@click.command("update")
@click.option("--number", required=True, help="Order number of the current cart.")
@click.option("--email", default=None, help="Contact email.")
@click.option("--item", "items", multiple=True, help="Line quantity as 'LineItemId:Qty' (0 removes).")
@click.option("--checkout", is_flag=True, default=False, help="Proceed to checkout.")
@pass_state
def cart_update(
    state: CliState, number: str, email: str | None, items: tuple[str, ...], checkout: bool
) -> None:
    """Update email or quantities, optionally moving on to checkout."""
    handler = UpdateOrderHandler(
        order_repo=order_repository(state.config),
        contents=order_contents(state.config),
        state_machine=checkout_state_machine(state.config),
    )

    try:
        response = handler.handle(
            state.session(), number, email=email, quantities=_parse_quantities(items), checkout=checkout
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_response(response)


@click.command("empty")
@pass_state
def cart_empty(state: CliState) -> None:
    """Remove every item from the cart."""
    handler = EmptyCartHandler(order_repository(state.config), order_contents(state.config))
    echo_response(handler.handle(state.session()))
