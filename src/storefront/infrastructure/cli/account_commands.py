"""CLI commands for customer and staff accounts."""

from __future__ import annotations

import click

from storefront.application.register_account import LoginHandler, RegisterAccountHandler
from storefront.domain.collaborators import Credentials
from storefront.domain.exceptions import DomainException
from storefront.domain.model.principal import Role
from storefront.infrastructure.bootstrap import identity_provider, session_store


@click.command("register")
@click.option("--phone", required=True, help="10-digit mobile number (used to log in).")
@click.option("--name", required=True, help="Display name.")
@click.password_option("--password", help="At least 6 characters.")
@click.option("--admin", is_flag=True, default=False, help="Create a staff account (admins only).")
def account_register(phone: str, name: str, password: str, admin: bool) -> None:
    """Create an account."""
    handler = RegisterAccountHandler(identity=identity_provider())
    credentials = Credentials(
        phone=phone,
        password=password,
        display_name=name,
        role=Role.ADMIN if admin else Role.CUSTOMER,
    )

    try:
        principal = handler.handle(session_store().current_principal(), credentials)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Account {principal.id} created for {principal.display_name}.")


@click.command("login")
@click.option("--phone", required=True)
@click.option("--password", prompt=True, hide_input=True)
def account_login(phone: str, password: str) -> None:
    """Log in; later commands act as this account."""
    handler = LoginHandler(identity=identity_provider())

    try:
        principal = handler.handle(Credentials(phone=phone, password=password))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    session_store().login(principal)
    click.echo(f"Logged in as {principal.display_name} ({principal.role.value}).")


@click.command("logout")
def account_logout() -> None:
    """Forget the logged-in account."""
    session_store().logout()
    click.echo("Logged out.")


@click.command("whoami")
def account_whoami() -> None:
    """Show the logged-in account."""
    principal = session_store().current_principal()
    if principal is None:
        click.echo("Not logged in.")
        return
    click.echo(f"{principal.display_name} ({principal.id}, {principal.role.value})")
