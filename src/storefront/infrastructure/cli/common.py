"""Shared CLI plumbing: the per-invocation context and response display."""

from __future__ import annotations

from dataclasses import dataclass

import click

from storefront.application.current_user import resolve_session
from storefront.application.dto import OrderDTO, Response
from storefront.domain.model.user import ShopperSession
from storefront.infrastructure.bootstrap import user_repository
from storefront.infrastructure.config import Settings


@dataclass
class CliState:

    config: Settings
    api_key: str | None = None
    guest_token: str | None = None

    def session(self) -> ShopperSession:
        return resolve_session(user_repository(self.config), self.api_key, self.guest_token)


pass_state = click.make_pass_decorator(CliState)


def echo_response(response: Response, guest_token: str | None = None) -> None:
    """Print a handler response the way a browser would surface it."""
    for level, message in response.flash.items():
        click.echo(f"[{level}] {message}", err=(level == "error"))
    if response.guest_token and response.guest_token != guest_token:
        click.echo(f"Guest token: {response.guest_token}")
    if response.is_redirect:
        click.echo(f"-> {response.location}")
    elif response.template is not None:
        click.echo(f"[{response.status}] {response.template}")
    for error in response.errors:
        click.echo(f"  ! {error}", err=True)
    if response.order is not None and not response.is_redirect:
        display_order(response.order)


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.number}  (state={dto.state})")
    if dto.email:
        click.echo(f"Email:    {dto.email}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.completed_at:
        click.echo(f"Completed: {dto.completed_at}")
    click.echo()

    if not dto.line_items:
        click.echo("  Your cart is empty.")
        return

    click.echo(f"  {'#':<4} {'Item':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*52}")
    for item in dto.line_items:
        click.echo(
            f"  {item.id:<4} {item.variant_name:<20} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*52}")
    if dto.shipping_method:
        click.echo(f"  {'Shipping (' + dto.shipping_method + ')':<32} {dto.ship_total:>20}")
    click.echo(f"  {'Order Total':<32} {dto.total:>20}")
    for payment in dto.payments:
        click.echo(f"  Payment {payment.amount} ({payment.state}) card ...{payment.last_digits}")
