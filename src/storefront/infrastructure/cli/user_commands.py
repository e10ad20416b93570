"""CLI commands for user accounts."""

from __future__ import annotations

import click

from storefront.application.create_user import CreateUserHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import user_repository
from storefront.infrastructure.cli.common import CliState, pass_state


@click.command("create")
@click.option("--email", required=True, help="Email address.")
@click.option("--admin", is_flag=True, default=False, help="Grant admin rights.")
@pass_state
def user_create(state: CliState, email: str, admin: bool) -> None:
    """Create a user and print its API key."""
    handler = CreateUserHandler(user_repo=user_repository(state.config))

    try:
        user = handler.handle(email=email, is_admin=admin)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{user.id} {user.email} created")
    click.echo(f"API key: {user.api_key}")
