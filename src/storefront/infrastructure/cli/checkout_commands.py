"""CLI commands for the checkout steps."""

from __future__ import annotations

import json

import click

from storefront.application.dto import CheckoutParams, PaymentSpec
from storefront.application.edit_checkout import EditCheckoutHandler
from storefront.application.update_checkout import UpdateCheckoutHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    checkout_state_machine,
    order_repository,
    payment_method_repository,
    stock_service,
    user_repository,
)
from storefront.infrastructure.cli.common import CliState, echo_response, pass_state


def _parse_address(raw: str | None) -> dict | None:
    """Parse a JSON object of address attributes."""
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Address must be a JSON object: {exc}")
    if not isinstance(value, dict):
        raise click.BadParameter("Address must be a JSON object")
    return value


@click.command("show")
@click.option("--state", "step", default=None, help="Checkout step to show.")
@pass_state
def checkout_show(state: CliState, step: str | None) -> None:
    """Show a checkout step for the current order."""
    handler = EditCheckoutHandler(
        order_repo=order_repository(state.config),
        payment_method_repo=payment_method_repository(state.config),
        state_machine=checkout_state_machine(state.config),
        stock_service=stock_service(state.config),
    )
    response = handler.handle(state.session(), step)
    echo_response(response)
    if response.is_ok:
        click.echo(f"Steps: {' > '.join(response.context['steps'])}")
        if step == "payment":
            for method_id, name in response.context["payment_methods"]:
                click.echo(f"  payment method {method_id}: {name}")


@click.command("update")
@click.option("--state", "step", required=True, help="Checkout step being submitted.")
@click.option("--email", default=None, help="Contact email.")
@click.option("--bill-address", default=None, help="Billing address as a JSON object.")
@click.option("--ship-address", default=None, help="Shipping address as a JSON object.")
@click.option("--use-billing", is_flag=True, default=False, help="Ship to the billing address.")
@click.option("--save-address", is_flag=True, default=False, help="Save the address to your account.")
@click.option("--payment-method", type=int, default=None, help="Payment method ID.")
@click.option("--card", default=None, help="Card number for the payment.")
@pass_state
def checkout_update(
    state: CliState,
    step: str,
    email: str | None,
    bill_address: str | None,
    ship_address: str | None,
    use_billing: bool,
    save_address: bool,
    payment_method: int | None,
    card: str | None,
) -> None:
    """Submit a checkout step and advance the order."""
    params = CheckoutParams(
        email=email,
        bill_address=_parse_address(bill_address),
        ship_address=_parse_address(ship_address),
        use_billing=use_billing,
        save_user_address=save_address,
        payments=[PaymentSpec(payment_method, card)] if payment_method is not None else [],
    )
    handler = UpdateCheckoutHandler(
        order_repo=order_repository(state.config),
        user_repo=user_repository(state.config),
        payment_method_repo=payment_method_repository(state.config),
        state_machine=checkout_state_machine(state.config),
        stock_service=stock_service(state.config),
    )

    try:
        response = handler.handle(state.session(), step, params)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_response(response)
